"""
Keyword extraction from job descriptions.

Turns free-text job description into an ordered list of salient terms used by
the Targeting context to score stored career items.
"""

import re
from collections import Counter
from typing import Iterable, List

# Common English function words that never count as keywords. "need" is not a
# function word but appears in nearly every posting ("We need a ..."), so it is
# listed too.
STOPWORDS = frozenset(
    {
        "the", "and", "for", "with", "you", "your", "our", "this", "that",
        "will", "are", "as", "to", "in", "of", "a", "an", "on", "or", "we",
        "they", "be", "is", "at", "by", "from", "need",
    }
)

DEFAULT_KEYWORD_LIMIT = 30
MIN_TOKEN_LENGTH = 3

# Anything that isn't a letter, digit, space or one of + . # becomes a space,
# so "C++", "C#" and "3.7" survive as tokens
_NON_TOKEN_CHARS = re.compile(r"[^a-z0-9+.# ]")


def tokenize(text: str, stopwords: Iterable[str] = STOPWORDS) -> List[str]:
    """
    Split job description text into candidate keyword tokens.

    Lower-cases, replaces disallowed characters with spaces, splits on
    whitespace and drops short tokens and stop words.

    Args:
        text: Raw job description text
        stopwords: Words to discard

    Returns:
        Tokens in order of appearance (duplicates kept)
    """
    if not text:
        return []
    stopwords = set(stopwords)
    cleaned = _NON_TOKEN_CHARS.sub(" ", text.lower())
    return [
        token
        for token in cleaned.split()
        if len(token) >= MIN_TOKEN_LENGTH and token not in stopwords
    ]


def extract_keywords(
    text: str,
    limit: int = DEFAULT_KEYWORD_LIMIT,
    stopwords: Iterable[str] = STOPWORDS,
) -> List[str]:
    """
    Extract the most frequent salient terms from a job description.

    Tokens are ranked by frequency, highest first. Ties keep the order in
    which the tokens first appear in the text.

    Args:
        text: Raw job description text (may be empty)
        limit: Maximum number of keywords returned
        stopwords: Words to discard

    Returns:
        Up to `limit` distinct lower-case keywords. Empty input gives [],
        which callers treat as "no targeting possible".

    Example:
        >>> extract_keywords("Python and SQL. Python pipelines")
        ['python', 'sql.', 'pipelines']
    """
    counts = Counter(tokenize(text, stopwords))
    # Counter keeps first-insertion order and sorted() is stable
    ranked = sorted(counts.items(), key=lambda x: x[1], reverse=True)
    return [word for word, _ in ranked[:limit]]
