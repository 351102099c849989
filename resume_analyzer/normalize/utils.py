from __future__ import annotations

import re
from typing import Iterable, Mapping

_BULLET_GLYPHS = "•◦▪▫●○■□◆◇▶►‣·"
# Dashes and numbers only count as bullets when followed by whitespace ("-5%" is not one).
_BULLET_PATTERN = re.compile(rf"^\s*(?:[{_BULLET_GLYPHS}]\s*|[-–—*]\s+|\d+[.)]\s+)")
_HEADING_EDGE_LEFT = "#*=_~ "
_HEADING_EDGE_RIGHT = ":*=_~# "
_MAX_HEADING_LEN = 50
_INLINE_LABEL_RE = re.compile(r"^\s*([A-Za-z][A-Za-z &'/]{1,40}?)\s*:\s*(.+)$")
_ACTION_RE = re.compile(
    r"^\s*(built|led|managed|designed|developed|implemented|created|delivered|improved|reduced|scaled|launched|optimized|engineered|owned|drove|supported|increased|collaborated|mentored|architected|automated|maintained)\b",
    re.IGNORECASE,
)

LOCATION_PATTERN = r"[A-Z][A-Za-z. ]+,\s*[A-Z]{2}(?:\s+\d{5})?"
TITLE_KEYWORD_RE = re.compile(
    r"\b(?:engineer|developer|manager|analyst|designer|architect|lead|director|consultant|specialist"
    r"|coordinator|administrator|scientist|intern|officer|associate|assistant|technician|programmer"
    r"|head of|vp|vice president|president|founder|co-founder|cto|ceo|cfo|researcher|accountant"
    r"|writer|editor|teacher|instructor|supervisor|strategist|representative|executive|product owner"
    r"|scrum master|tester|recruiter)\b",
    re.IGNORECASE,
)

HeadingIndex = Mapping[str, str]


def normalize_line(line: str) -> str:
    return re.sub(r"\s+", " ", line).strip()


def is_bullet_like(line: str) -> bool:
    match = _BULLET_PATTERN.match(line)
    return bool(match) and bool(line[match.end():].strip())


def strip_bullet_prefix(line: str) -> str:
    return _BULLET_PATTERN.sub("", line, count=1).strip()


def starts_with_action(line: str) -> bool:
    return bool(_ACTION_RE.match(line))


def build_heading_index(mapping: Mapping[str, Iterable[str]]) -> dict[str, str]:
    """Flatten {kind: synonyms} into {synonym: kind} for heading lookup."""
    index: dict[str, str] = {}
    for kind, synonyms in mapping.items():
        for synonym in synonyms:
            index.setdefault(synonym.lower(), kind)
    return index


def heading_key(line: str) -> str | None:
    stripped = normalize_line(line).replace("’", "'")
    stripped = stripped.lstrip(_HEADING_EDGE_LEFT).rstrip(_HEADING_EDGE_RIGHT).strip()
    if not stripped or len(stripped) > _MAX_HEADING_LEN:
        return None
    return stripped.lower()


def heading_kind(line: str, headings: HeadingIndex) -> str | None:
    key = heading_key(line)
    if key is None:
        return None
    return headings.get(key)


def split_inline_label(line: str) -> tuple[str, str] | None:
    match = _INLINE_LABEL_RE.match(line)
    if not match:
        return None
    return match.group(1).strip().lower(), match.group(2).strip()


def find_section(
    lines: list[str],
    kind: str,
    headings: HeadingIndex,
    *,
    allow_inline: bool = False,
) -> list[str] | None:
    """Return the raw lines under the first heading of `kind`.

    The section ends at the next heading of a different kind; repeated headings
    of the same kind are skipped. With `allow_inline` and no standalone heading,
    the content of the first `Label: content` line whose label names the kind
    is returned instead. Returns None when nothing is found.
    """
    collected: list[str] = []
    opened = False
    for line in lines:
        found = heading_kind(line, headings)
        if not opened:
            opened = found == kind
            continue
        if found is not None:
            if found != kind:
                break
            continue
        collected.append(line)
    if opened:
        return collected
    if allow_inline:
        for line in lines:
            labelled = split_inline_label(line)
            if labelled and headings.get(labelled[0]) == kind:
                return [labelled[1]]
    return None


def non_empty_lines(lines: Iterable[str]) -> list[str]:
    return [normalize_line(line) for line in lines if line.strip()]


def split_blocks(lines: Iterable[str]) -> list[list[str]]:
    """Group lines into blank-line separated blocks of normalized lines."""
    blocks: list[list[str]] = []
    current: list[str] = []
    for line in lines:
        cleaned = normalize_line(line)
        if not cleaned:
            if current:
                blocks.append(current)
                current = []
            continue
        current.append(cleaned)
    if current:
        blocks.append(current)
    return blocks
