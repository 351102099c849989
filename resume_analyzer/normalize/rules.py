from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, TypeVar

from .utils import normalize_line

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ExtractionRule(Generic[T]):
    """A named heuristic that returns a value, or None when it does not apply."""

    name: str
    extract: Callable[[str], T | None]

    def __call__(self, text: str) -> T | None:
        return self.extract(text)


def first_group(match: re.Match[str]) -> str | None:
    value = normalize_line(match.group(1))
    return value or None


def regex_rule(
    name: str,
    pattern: str | re.Pattern[str],
    build: Callable[[re.Match[str]], T | None] = first_group,  # type: ignore[assignment]
    flags: int = 0,
) -> ExtractionRule[T]:
    compiled = re.compile(pattern, flags) if isinstance(pattern, str) else pattern

    def _extract(text: str) -> T | None:
        for match in compiled.finditer(text):
            value = build(match)
            if value is not None:
                return value
        return None

    return ExtractionRule(name=name, extract=_extract)


def first_match(rules: Iterable[ExtractionRule[T]], text: str) -> T | None:
    for rule in rules:
        value = rule(text)
        if value is not None:
            logger.debug("extraction_rule_hit rule=%s", rule.name)
            return value
    return None
