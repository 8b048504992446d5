import re
from typing import List, Tuple
from urllib.parse import unquote

from bs4 import BeautifulSoup

_HIDDEN_TAGS = ['script', 'style', 'noscript']
_WHITESPACE = re.compile(r'\s+')
EMAIL_REGEX = re.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}')
_RECIPIENT_SEPARATOR = re.compile(r'[,;]')

collapse_whitespace = lambda text: _WHITESPACE.sub(' ', text or '').strip()

get_soup = lambda html: BeautifulSoup(html or '', 'html.parser')


def parse_page(html: str) -> Tuple[str, List[str]]:
    """
    Split raw HTML into visible text and outbound links.

    Args:
        html: Raw HTML string

    Returns:
        (text, links) where text is the whitespace-collapsed body text with
        script/style/noscript removed, and links are the raw href values of
        every <a href> in the markup (collected before anything is removed).
    """
    soup = get_soup(html)

    links = [a['href'].strip() for a in soup.find_all('a', href=True) if a['href'].strip()]

    for tag in soup(_HIDDEN_TAGS):
        tag.decompose()

    body = soup.find('body') or soup
    text = collapse_whitespace(body.get_text(' '))

    return text, links


def _mailto_addresses(href: str) -> List[str]:
    """Addresses in a mailto: href, lower-cased; query, fragment and non-address parts dropped"""
    if not href.lower().startswith('mailto:'):
        return []
    target = unquote(href[len('mailto:'):].split('?')[0].split('#')[0])
    parts = (part.strip().lower() for part in _RECIPIENT_SEPARATOR.split(target))
    return [part for part in parts if EMAIL_REGEX.fullmatch(part)]


def extract_mailto_addresses(html: str) -> List[str]:
    """Addresses from every <a href="mailto:..."> in document order"""
    soup = get_soup(html)
    return [address for a in soup.find_all('a', href=True) for address in _mailto_addresses(a['href'].strip())]
