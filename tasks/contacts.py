import re
from typing import Dict, List, Optional, Tuple
from urllib.parse import urljoin, urlparse

from models.enums import ContactKind
from models.schemas import Contact, PageResult
from rules import (
    EMAIL_PRIORITY, DEFAULT_EMAIL_TYPE, DEFAULT_EMAIL_CONFIDENCE,
    PLACEHOLDER_EMAIL_DOMAINS, MAX_EMAIL_LENGTH,
    FORM_PAGE_KEYWORDS, FORM_CONFIDENCE,
    AGENCY_PATTERNS, AGENCY_NAME_MIN_LENGTH, AGENCY_NAME_MAX_LENGTH, AGENCY_CONFIDENCE,
)
from utils.html_parser import EMAIL_REGEX, get_soup, extract_mailto_addresses

_AGENCY_REGEXES = [re.compile(p, re.IGNORECASE) for p in AGENCY_PATTERNS]


def is_valid_email(email: str) -> bool:
    """Reject placeholder domains and oversized addresses"""
    local, _, domain = email.partition('@')
    if not local or not domain:
        return False
    if any(placeholder in domain for placeholder in PLACEHOLDER_EMAIL_DOMAINS):
        return False
    return len(email) <= MAX_EMAIL_LENGTH


def classify_email(email: str) -> Tuple[str, int]:
    """(email_type, confidence) from the first priority keyword found in the local part"""
    local = email.split('@')[0].lower()
    for keyword, confidence in EMAIL_PRIORITY:
        if keyword in local:
            return keyword, confidence
    return DEFAULT_EMAIL_TYPE, DEFAULT_EMAIL_CONFIDENCE


def email_contact(email: str, source_url: str) -> Contact:
    email_type, confidence = classify_email(email)
    return Contact(kind=ContactKind.EMAIL.value, value=email, confidence=confidence,
                   source_url=source_url, email_type=email_type)


def extract_emails(page: PageResult) -> List[Contact]:
    """mailto: targets first, then addresses written in visible text"""
    addresses = extract_mailto_addresses(page.html)
    addresses += [match.lower() for match in EMAIL_REGEX.findall(page.text)]

    seen = set()
    contacts = []
    for email in addresses:
        if email in seen or not is_valid_email(email):
            continue
        seen.add(email)
        contacts.append(email_contact(email, page.url))
    return contacts


def resolve_form_action(action: Optional[str], page_url: str) -> str:
    """Absolute submission URL, or the page URL when the action is unusable"""
    action = (action or '').strip()
    if not action or action.lower().startswith('javascript:'):
        return page_url
    try:
        resolved = urljoin(page_url, action)
    except ValueError:
        return page_url
    return resolved if urlparse(resolved).scheme in ('http', 'https') else page_url


is_form_page = lambda path: path == '/' or any(keyword in path.lower() for keyword in FORM_PAGE_KEYWORDS)


def extract_forms(page: PageResult) -> List[Contact]:
    """Forms that take an email address or free text"""
    soup = get_soup(page.html)
    contacts = []
    for form in soup.find_all('form'):
        if not (form.select_one('input[type="email"]') or form.find('textarea')):
            continue
        contacts.append(Contact(kind=ContactKind.FORM.value,
                                value=resolve_form_action(form.get('action'), page.url),
                                confidence=FORM_CONFIDENCE, source_url=page.url))
    return contacts


def extract_agencies(page: PageResult) -> List[Contact]:
    """PR and marketing agencies named in visible text"""
    contacts = []
    for regex in _AGENCY_REGEXES:
        for match in regex.finditer(page.text):
            name = match.group(1)
            if AGENCY_NAME_MIN_LENGTH < len(name) < AGENCY_NAME_MAX_LENGTH:
                contacts.append(Contact(kind=ContactKind.AGENCY.value, value=name.strip(),
                                        confidence=AGENCY_CONFIDENCE, source_url=page.url))
    return contacts


class ContactExtractor:
    """Emails, contact forms and agency mentions across a crawl"""

    def extract(self, pages: Dict[str, PageResult], base_url: str) -> List[Contact]:
        """
        Collect contacts from every successful page.

        Args:
            pages: {path: PageResult} in crawl order
            base_url: Company website (kept for callers that log it)

        Returns:
            Contacts sorted by confidence, highest first; ties keep discovery
            order. Each value appears once.
        """
        contacts = []
        seen = set()

        def _add(found: List[Contact]):
            for contact in found:
                if contact.value not in seen:
                    seen.add(contact.value)
                    contacts.append(contact)

        for path, page in pages.items():
            if not page.success:
                continue
            _add(extract_emails(page))
            if is_form_page(path):
                _add(extract_forms(page))
            _add(extract_agencies(page))

        print(f"  [CONTACTS] {len(contacts)} found for {base_url}")
        return sorted(contacts, key=lambda c: c.confidence, reverse=True)
