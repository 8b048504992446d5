from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class PageResult:
    """One fetched page of a crawl run"""
    path: str
    url: str
    html: str = ''
    text: str = ''
    links: Tuple[str, ...] = ()
    success: bool = False
    error: Optional[str] = None


@dataclass
class Signal:
    category: str
    text: str
    weight: int
    source_url: Optional[str] = None


@dataclass
class Contact:
    kind: str
    value: str
    confidence: int
    source_url: Optional[str] = None
    email_type: Optional[str] = None


@dataclass
class Person:
    name: str
    job_title: Optional[str] = None
    department: Optional[str] = None
    source_url: Optional[str] = None
    search_url: Optional[str] = None


@dataclass
class RankedPath:
    kind: str
    value: str
    score: int
    person_name: Optional[str] = None
    person_title: Optional[str] = None
    source_url: Optional[str] = None


@dataclass
class SearchLink:
    title: str
    url: str


@dataclass
class PathSelection:
    primary: RankedPath
    backup: Optional[RankedPath] = None
    search_links: List[SearchLink] = field(default_factory=list)
