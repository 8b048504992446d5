from typing import Dict, List
from urllib.parse import urljoin, urlparse

from config import MAX_CRAWL_PATHS
from models.schemas import PageResult
from rules import RELEVANT_PATHS
from tasks.fetcher import Fetcher


class InvalidUrlError(ValueError):
    """Base URL cannot be crawled"""
    pass


# Path comparison ignores case and a trailing slash
_path_key = lambda path: path.lower().rstrip('/') or '/'


def normalize_base_url(base_url: str) -> str:
    """
    Force a scheme and strip the trailing slash.

    Raises:
        InvalidUrlError: empty or malformed input, non-http(s) scheme, missing host
            or a host containing whitespace
    """
    url = (base_url or '').strip()
    if not url:
        raise InvalidUrlError("Empty base URL")

    if '://' not in url:
        url = f"https://{url}"

    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError as e:
        raise InvalidUrlError(f"Malformed base URL: {base_url}") from e

    if parsed.scheme.lower() not in ('http', 'https'):
        raise InvalidUrlError(f"Unsupported scheme in base URL: {base_url}")
    if not hostname:
        raise InvalidUrlError(f"No host in base URL: {base_url}")
    if any(ch.isspace() for ch in parsed.netloc):
        raise InvalidUrlError(f"Whitespace in host of base URL: {base_url}")

    return url.rstrip('/')


def discover_relevant_paths(base_url: str, links: List[str], relevant_paths: List[str] = RELEVANT_PATHS) -> List[str]:
    """Same-host homepage link paths that are on the allow-list, original casing kept, first seen first"""
    base_host = urlparse(base_url).hostname
    allowed = {path.lower() for path in relevant_paths}
    allowed |= {f"{path}/" for path in allowed}

    found = []
    for link in links:
        try:
            parsed = urlparse(urljoin(f"{base_url}/", link))
        except ValueError:
            continue
        if parsed.hostname != base_host:
            continue
        if parsed.path.lower() in allowed and parsed.path not in found:
            found.append(parsed.path)
    return found


class Crawler:
    """Homepage plus a bounded set of relevant same-host paths"""

    def __init__(self, fetcher: Fetcher, max_paths: int = MAX_CRAWL_PATHS,
                 relevant_paths: List[str] = RELEVANT_PATHS):
        self.fetcher = fetcher
        self.max_paths = max_paths
        self.relevant_paths = relevant_paths

    def plan_paths(self, base_url: str, homepage: PageResult) -> List[str]:
        """Discovered paths first, then the rest of the allow-list, deduplicated and capped"""
        candidates = discover_relevant_paths(base_url, homepage.links, self.relevant_paths)
        candidates += [path for path in self.relevant_paths if path != '/']

        seen = {'/'}
        planned = []
        for path in candidates:
            key = _path_key(path)
            if key in seen:
                continue
            seen.add(key)
            planned.append(path)
        return planned[:self.max_paths]

    def crawl(self, base_url: str) -> Dict[str, PageResult]:
        """
        Crawl one company website.

        Returns:
            {path: PageResult} in fetch order. The homepage is always present
            under '/', successful or not; later paths only when they succeeded.

        Raises:
            InvalidUrlError: before any request when base_url is unusable
        """
        base = normalize_base_url(base_url)
        print(f"  [CRAWL] {base}")

        results = {}
        homepage = self.fetcher.fetch(base, path='/')
        results['/'] = homepage

        if not homepage.success:
            print(f"  [CRAWL] Homepage failed: {homepage.error}")
            return results

        for path in self.plan_paths(base, homepage):
            result = self.fetcher.fetch(f"{base}{path}", path=path)
            if result.success:
                results[path] = result
                print(f"    + {path}")

        return results
