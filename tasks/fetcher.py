from typing import Optional
from urllib.parse import urlparse

import requests
from bs4 import ParserRejectedMarkup

from config import REQUEST_TIMEOUT, USER_AGENT, ALLOW_INSECURE_SSL
from models.schemas import PageResult
from utils.html_parser import parse_page
from utils.rate_limiter import RateLimiter

_HEADERS = {
    'User-Agent': USER_AGENT,
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
}

# Helper functions for DRY
_default_path = lambda url: urlparse(url).path or '/'

_failure = lambda path, url, message: PageResult(path=path, url=url, success=False, error=message)


def _success(path: str, url: str, html: str) -> PageResult:
    text, links = parse_page(html)
    return PageResult(path=path, url=url, html=html, text=text, links=tuple(links), success=True)


class Fetcher:
    """
    Single-page HTTP GET under a shared rate limiter.

    Transport failures never raise out of fetch(); they come back as a
    PageResult with success=False and a short error string.
    """

    def __init__(self, rate_limiter: RateLimiter, session=None, timeout: int = REQUEST_TIMEOUT,
                 user_agent: str = USER_AGENT, allow_insecure_ssl: bool = ALLOW_INSECURE_SSL):
        self.rate_limiter = rate_limiter
        self.session = session or requests.Session()
        self.timeout = timeout
        self.headers = dict(_HEADERS, **{'User-Agent': user_agent})
        self.allow_insecure_ssl = allow_insecure_ssl
        self.request_count = 0

    def _get(self, url: str, verify: bool = True):
        self.rate_limiter.wait()
        self.request_count += 1
        return self.session.get(url, headers=self.headers, timeout=self.timeout,
                                allow_redirects=True, verify=verify)

    def _try_requests(self, path: str, url: str, verify: bool = True) -> Optional[PageResult]:
        """Returns None only for an SSL failure that may be retried without verification"""
        try:
            response = self._get(url, verify=verify)
            if not 200 <= response.status_code < 300:
                return _failure(path, url, f"HTTP {response.status_code}")
            return _success(path, url, response.text)
        except requests.exceptions.SSLError as e:
            return None if verify and self.allow_insecure_ssl else _failure(path, url, str(e))
        except requests.Timeout:
            return _failure(path, url, f"Timeout after {self.timeout}s")
        except requests.RequestException as e:
            return _failure(path, url, str(e))
        except ParserRejectedMarkup:
            print(f"  [FETCH] Unparseable markup at {url}")
            return _failure(path, url, "Unparseable markup")

    def fetch(self, url: str, path: Optional[str] = None) -> PageResult:
        """
        Fetch one page.

        Args:
            url: Absolute URL to GET
            path: Key recorded on the result; defaults to the URL's path

        Returns:
            PageResult with visible text and raw link targets on success,
            or success=False and an error message on any failure
        """
        path = path or _default_path(url)

        result = self._try_requests(path, url, verify=True)
        if result is None:
            print(f"  [FETCH] SSL verification failed for {url}, retrying without verification")
            result = self._try_requests(path, url, verify=False)

        return result
