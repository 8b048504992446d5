from typing import List, Optional

from models.enums import ContactKind, PathKind
from models.schemas import Contact, Person, RankedPath, PathSelection
from rules import (
    PATH_SCORES, PARTNERSHIP_EMAIL_TYPES, MARKETING_EMAIL_TYPES, PRESS_EMAIL_TYPES,
    FALLBACK_SEARCH_TITLE, MANUAL_SEARCH_TITLES,
)
from utils.search_links import people_search_url, search_links

PATH_KIND_LABELS = {
    PathKind.NAMED_EMAIL.value: 'Named Person + Email',
    PathKind.INBOX.value: 'Department Inbox',
    PathKind.AGENCY.value: 'Press/Agency',
    PathKind.FORM.value: 'Contact Form',
    PathKind.EXTERNAL_SEARCH.value: 'LinkedIn (Manual)',
}

path_kind_label = lambda kind: PATH_KIND_LABELS.get(getattr(kind, 'value', kind), str(kind))

_is_email = lambda contact: contact.kind == ContactKind.EMAIL.value
_local_part = lambda email: email.split('@')[0].lower()


def email_matches_person(email: str, person_name: str) -> bool:
    """Local part contains a name token, or a name token contains the local part"""
    local = _local_part(email)
    return any(token in local or local in token for token in person_name.lower().split())


def _path(kind: PathKind, contact: Contact, score_key: str, **person) -> RankedPath:
    return RankedPath(kind=kind.value, value=contact.value, score=PATH_SCORES[score_key],
                      source_url=contact.source_url, **person)


def rank_paths(contacts: List[Contact], people: List[Person], company_name: str,
               region: Optional[str] = None) -> List[RankedPath]:
    """
    Every candidate outreach path, best first.

    Candidates are generated tier by tier and then stably sorted by score,
    so equal scores keep generation order. The external search fallback is
    always last.
    """
    emails = [c for c in contacts if _is_email(c)]
    ranked = []

    # Named person + matching email, each address claimed by one person at most
    claimed = set()
    for person in people:
        match = next((c for c in emails
                      if c.value not in claimed and email_matches_person(c.value, person.name)), None)
        if match:
            claimed.add(match.value)
            ranked.append(_path(PathKind.NAMED_EMAIL, match, 'named_email',
                                person_name=person.name, person_title=person.job_title))

    # Department inboxes
    for contact in emails:
        if contact.email_type in PARTNERSHIP_EMAIL_TYPES:
            ranked.append(_path(PathKind.INBOX, contact, 'partnership_inbox'))
        elif contact.email_type in MARKETING_EMAIL_TYPES:
            ranked.append(_path(PathKind.INBOX, contact, 'marketing_inbox'))

    # Agencies and press inboxes
    for contact in contacts:
        if contact.kind == ContactKind.AGENCY.value:
            ranked.append(_path(PathKind.AGENCY, contact, 'agency'))
        elif _is_email(contact) and contact.email_type in PRESS_EMAIL_TYPES:
            ranked.append(_path(PathKind.AGENCY, contact, 'press_email'))

    # Forms
    ranked += [_path(PathKind.FORM, c, 'form') for c in contacts if c.kind == ContactKind.FORM.value]

    # Any email not already ranked
    ranked_values = {path.value for path in ranked}
    for contact in emails:
        if contact.value not in ranked_values:
            ranked_values.add(contact.value)
            ranked.append(_path(PathKind.INBOX, contact, 'generic_email'))

    ranked.append(RankedPath(kind=PathKind.EXTERNAL_SEARCH.value,
                             value=people_search_url(company_name, FALLBACK_SEARCH_TITLE, region),
                             score=PATH_SCORES['external_search']))

    return sorted(ranked, key=lambda path: path.score, reverse=True)


def select_paths(contacts: List[Contact], people: List[Person], company_name: str,
                 region: Optional[str] = None) -> PathSelection:
    """Primary, backup and manual search links from already-extracted contacts and people"""
    ranked = rank_paths(contacts, people, company_name, region)
    return PathSelection(
        primary=ranked[0],
        backup=ranked[1] if len(ranked) > 1 else None,
        search_links=search_links(company_name, MANUAL_SEARCH_TITLES, region),
    )


class PathSelector:
    """Ranks a company's persisted contacts and people into outreach paths"""

    def __init__(self, repo):
        self.repo = repo

    def select(self, company_id: int, company_name: str, region: Optional[str] = None) -> Optional[PathSelection]:
        contacts = self.repo.get_contacts(company_id)
        people = self.repo.get_people(company_id)
        return select_paths(contacts, people, company_name, region)
