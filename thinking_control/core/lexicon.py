"""
Keyword scoring over free text.

Keywords match case-insensitively on word boundaries, so "plan" does not
count inside "replanning". Multi-word keywords ("pros and cons") match as a
contiguous phrase. Regex metacharacters inside a keyword are escaped.
"""

import re
from functools import lru_cache
from typing import Iterable, List


@lru_cache(maxsize=512)
def _compile_keyword(keyword: str) -> re.Pattern:
    return re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE)


def keyword_matches(text: str, keyword: str) -> bool:
    """Check whether ``keyword`` occurs in ``text`` as a whole word or phrase."""
    if not text or not keyword:
        return False
    return _compile_keyword(keyword).search(text) is not None


def score(text: str, keywords: Iterable[str]) -> int:
    """
    Count how many keywords occur in the text.

    Each keyword contributes at most 1, however often it appears.

    Args:
        text: Text to search
        keywords: Words or phrases to look for

    Returns:
        Number of distinct keywords found (0 if none)
    """
    return sum(1 for keyword in keywords if keyword_matches(text, keyword))


def matched_keywords(text: str, keywords: Iterable[str]) -> List[str]:
    """Keywords found in the text, in the order they were given."""
    return [keyword for keyword in keywords if keyword_matches(text, keyword)]
