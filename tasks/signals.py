import re
from typing import Dict, List, Optional

from models.schemas import PageResult, Signal
from rules import SIGNAL_CATEGORIES, SNIPPET_CONTEXT_CHARS
from utils.html_parser import collapse_whitespace


def _compile(categories: Dict) -> List:
    """[(category, weight, [compiled patterns])] in table order"""
    return [
        (name, table['weight'], [re.compile(p, re.IGNORECASE) for p in table['patterns']])
        for name, table in categories.items()
    ]


def snippet(text: str, start: int, end: int, context: int = SNIPPET_CONTEXT_CHARS) -> str:
    """Match plus `context` characters either side, whitespace-collapsed"""
    return collapse_whitespace(text[max(0, start - context):min(len(text), end + context)])


def first_match(patterns: List, text: str) -> Optional[re.Match]:
    """First pattern (in order) that matches anywhere in text"""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match
    return None


class SignalAnalyzer:
    """Keyword-category scan over crawled page text"""

    def __init__(self, categories: Dict = SIGNAL_CATEGORIES):
        self.categories = _compile(categories)

    def analyze(self, pages: Dict[str, PageResult]) -> List[Signal]:
        """
        One Signal per category, taken from the first successful page that mentions it.

        Args:
            pages: {path: PageResult} in crawl order

        Returns:
            Signals ordered by the page they were found on, then category order
        """
        signals = []
        seen = set()

        for path, page in pages.items():
            if not page.success:
                continue

            for category, weight, patterns in self.categories:
                if category in seen:
                    continue
                match = first_match(patterns, page.text)
                if not match:
                    continue

                seen.add(category)
                context = snippet(page.text, match.start(), match.end())
                signals.append(Signal(category=category, text=f"[{path}] ...{context}...",
                                      weight=weight, source_url=page.url))

        return signals

    score = staticmethod(lambda signals: sum(s.weight for s in signals))
