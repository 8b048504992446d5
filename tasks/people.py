import re
from typing import Dict, List, Optional
from urllib.parse import unquote

import requests

from config import WIKIPEDIA_API_URL, REQUEST_TIMEOUT, USER_AGENT
from models.schemas import PageResult, Person
from rules import (
    TEAM_PAGE_KEYWORDS, PERSON_CARD_SELECTORS, PERSON_NAME_SELECTOR, PERSON_TITLE_SELECTOR,
    CARD_FALLBACK_MAX_CHARS, NAME_PATTERN, RELEVANT_DEPARTMENTS, RELEVANT_TITLE_PATTERNS,
    PERSON_TEXT_PATTERNS,
)
from utils.html_parser import get_soup, collapse_whitespace
from utils.search_links import person_search_url

_NAME = re.compile(NAME_PATTERN)
_TITLE_PATTERNS = [re.compile(p, re.IGNORECASE) for p in RELEVANT_TITLE_PATTERNS]
_TEXT_PATTERNS = [re.compile(p) for p in PERSON_TEXT_PATTERNS]
_KEY_PEOPLE = re.compile(r'\|\s*key_people\s*=([^|]+)', re.IGNORECASE)
_WIKI_LINK = re.compile(r'\[\[([^|\]]+)(?:\|([^\]]+))?\]\]')
_PAREN_TITLE = re.compile(r'^\s*\(([^)]+)\)')

is_name_shaped = lambda name: bool(name) and _NAME.fullmatch(name) is not None
is_relevant_title = lambda title: bool(title) and any(p.search(title) for p in _TITLE_PATTERNS)
is_team_page = lambda path: any(keyword in path.lower() for keyword in TEAM_PAGE_KEYWORDS)


def classify_department(title: Optional[str]) -> Optional[str]:
    """First department whose keyword appears in the title"""
    if not title:
        return None
    lowered = title.lower()
    for department, keywords in RELEVANT_DEPARTMENTS.items():
        if any(keyword in lowered for keyword in keywords):
            return department
    return None


def make_person(name: str, job_title: Optional[str], source_url: str, company_name: str) -> Person:
    return Person(name=name, job_title=job_title or None, department=classify_department(job_title),
                  source_url=source_url, search_url=person_search_url(name, company_name))


def merge_people(*groups: List[Person]) -> List[Person]:
    """Concatenate groups, keeping the first person seen for each lower-cased name"""
    seen = set()
    merged = []
    for group in groups:
        for person in group:
            key = person.name.lower()
            if key not in seen:
                seen.add(key)
                merged.append(person)
    return merged


def _card_fields(card) -> tuple:
    """(name, title) from a team card, falling back to its first two text lines"""
    heading = card.select_one(PERSON_NAME_SELECTOR)
    role = card.select_one(PERSON_TITLE_SELECTOR)
    name = collapse_whitespace(heading.get_text(' ')) if heading else ''
    title = collapse_whitespace(role.get_text(' ')) if role else ''

    if not name:
        raw = card.get_text()
        if len(raw) < CARD_FALLBACK_MAX_CHARS:
            lines = [line.strip() for line in raw.split('\n') if line.strip()]
            if lines:
                name = lines[0]
                title = lines[1] if len(lines) > 1 else ''

    return name, title


def extract_from_team_page(page: PageResult, company_name: str) -> List[Person]:
    """Structural pass over person/team card markup"""
    soup = get_soup(page.html)
    people = []
    for selector in PERSON_CARD_SELECTORS:
        for card in soup.select(selector):
            name, title = _card_fields(card)
            if not is_name_shaped(name):
                continue
            if is_relevant_title(title) or classify_department(title):
                people.append(make_person(name, title, page.url, company_name))
    return people


def extract_from_text(page: PageResult, company_name: str) -> List[Person]:
    """Free-text pass: 'Name, Title' and 'led by Name' phrasing"""
    people = []
    for pattern in _TEXT_PATTERNS:
        for match in pattern.finditer(page.text):
            name = match.group(1).strip()
            title = match.group(2).strip() if pattern.groups > 1 and match.group(2) else None
            if is_name_shaped(name):
                people.append(make_person(name, title, page.url, company_name))
    return people


class PeopleExtractor:
    """Named people in sponsorship-relevant roles, found on crawled pages"""

    def extract(self, pages: Dict[str, PageResult], company_name: str) -> List[Person]:
        """
        Run the structural pass on team-like pages and the free-text pass on every page.

        Returns:
            People in discovery order, one per lower-cased name
        """
        groups = []
        for path, page in pages.items():
            if not page.success:
                continue
            if is_team_page(path):
                groups.append(extract_from_team_page(page, company_name))
            groups.append(extract_from_text(page, company_name))

        people = merge_people(*groups)
        print(f"  [PEOPLE] {len(people)} found for {company_name}")
        return people


# External biography source

_article_title = lambda url: unquote(url.split('/wiki/', 1)[1] if '/wiki/' in url else '').replace('_', ' ')


def parse_key_people(wikitext: str, source_url: str, company_name: str) -> List[Person]:
    """People linked in the infobox key_people field, with an optional '(Title)' after each link"""
    field = _KEY_PEOPLE.search(wikitext or '')
    if not field:
        return []

    text = field.group(1)
    people = []
    for match in _WIKI_LINK.finditer(text):
        name = (match.group(2) or match.group(1)).strip()
        title_match = _PAREN_TITLE.match(text[match.end():match.end() + 100])
        title = title_match.group(1).strip() if title_match else None
        if is_name_shaped(name):
            people.append(make_person(name, title, source_url, company_name))
    return people


class WikipediaBiographySource:
    """Key people from a company's Wikipedia infobox via the MediaWiki API"""

    def __init__(self, session=None, rate_limiter=None, api_url: str = WIKIPEDIA_API_URL,
                 timeout: int = REQUEST_TIMEOUT):
        self.session = session or requests.Session()
        self.rate_limiter = rate_limiter
        self.api_url = api_url
        self.timeout = timeout

    def fetch_wikitext(self, title: str) -> str:
        """Current article wikitext, '' when the page or revision is missing"""
        params = {
            'action': 'query', 'titles': title, 'prop': 'revisions', 'rvprop': 'content',
            'rvslots': 'main', 'format': 'json', 'origin': '*',
        }
        if self.rate_limiter:
            self.rate_limiter.wait()
        response = self.session.get(self.api_url, params=params, timeout=self.timeout,
                                    headers={'User-Agent': USER_AGENT})
        response.raise_for_status()

        pages = (response.json().get('query') or {}).get('pages') or {}
        if not pages:
            return ''
        page = next(iter(pages.values()))
        revisions = page.get('revisions') or [{}]
        return ((revisions[0].get('slots') or {}).get('main') or {}).get('*', '')

    def extract_from_external_biography(self, source_url: str, company_name: str) -> List[Person]:
        """Never raises; any lookup or parse failure yields []"""
        title = _article_title(source_url or '')
        if not title:
            return []
        try:
            return parse_key_people(self.fetch_wikitext(title), source_url, company_name)
        except Exception as e:
            print(f"  [PEOPLE] Could not fetch Wikipedia data for {company_name}: {type(e).__name__}: {e}")
            return []
