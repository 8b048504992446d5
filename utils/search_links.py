"""People-search links for manual follow-up on a company's staff."""

from typing import List, Optional
from urllib.parse import urlencode

from models.schemas import SearchLink
from rules import PEOPLE_SEARCH_URL, REGIONS

_region_filter = lambda region: REGIONS.get(region.lower(), '') if region else ''


def people_search_url(company_name: str, title: Optional[str] = None, region: Optional[str] = None) -> str:
    """Search URL for people holding `title` at `company_name`"""
    keywords = [title] if title else []
    keywords.append(company_name)

    params = {'keywords': ' '.join(keywords), 'origin': 'GLOBAL_SEARCH_HEADER'}
    region_filter = _region_filter(region)
    if region_filter:
        params['geoUrn'] = region_filter

    return f"{PEOPLE_SEARCH_URL}?{urlencode(params)}"


def person_search_url(person_name: str, company_name: str) -> str:
    """Search URL for a named person at the company"""
    params = {'keywords': f"{person_name} {company_name}", 'origin': 'GLOBAL_SEARCH_HEADER'}
    return f"{PEOPLE_SEARCH_URL}?{urlencode(params)}"


def search_links(company_name: str, titles: List[str], region: Optional[str] = None) -> List[SearchLink]:
    """One search link per title"""
    return [SearchLink(title=title, url=people_search_url(company_name, title, region)) for title in titles]
