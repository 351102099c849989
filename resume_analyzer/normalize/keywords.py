from __future__ import annotations

import re

from resume_analyzer.taxonomy import get_default_taxonomy_provider

_DISALLOWED_RE = re.compile(r"[^a-z0-9\s+#./-]")


def extract_keywords(text: str) -> list[str]:
    """Ordered, de-duplicated lowercase keywords worth matching on."""
    taxonomy = get_default_taxonomy_provider()
    cleaned = _DISALLOWED_RE.sub(" ", text.lower())
    seen: set[str] = set()
    keywords: list[str] = []
    for raw_token in cleaned.split():
        token = raw_token.rstrip(".").strip("-/")
        if not token or token in seen:
            continue
        is_tech = token in taxonomy.tech_keywords
        if len(token) < 2 and not is_tech:
            continue
        if token in taxonomy.stop_words:
            continue
        if not is_tech and len(token) <= 3:
            continue
        seen.add(token)
        keywords.append(token)
    return keywords


def extract_phrases(text: str) -> list[str]:
    taxonomy = get_default_taxonomy_provider()
    lowered = text.lower()
    return [
        phrase
        for phrase in taxonomy.phrases
        if re.search(rf"(?<![a-z0-9]){re.escape(phrase)}(?![a-z0-9])", lowered)
    ]


def count_keyword(text: str, keyword: str) -> int:
    """Whole-word, case-insensitive occurrences of `keyword` in `text`."""
    keyword = keyword.strip()
    if not keyword:
        return 0
    pattern = rf"(?<![A-Za-z0-9_]){re.escape(keyword)}(?![A-Za-z0-9_])"
    return len(re.findall(pattern, text, flags=re.IGNORECASE))


def contains_term(text: str, term: str) -> bool:
    return count_keyword(text, term) > 0


def collect_keywords(text: str, limit: int | None = None) -> list[str]:
    """Dictionary phrases first, then single keywords, de-duplicated in order."""
    collected: list[str] = []
    for keyword in extract_phrases(text) + extract_keywords(text):
        if keyword not in collected:
            collected.append(keyword)
    return collected[:limit] if limit is not None else collected
