from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .provider import TaxonomyProvider


class LocalTaxonomy(TaxonomyProvider):
    def __init__(
        self,
        synonyms_path: str | Path | None = None,
        terms_path: str | Path | None = None,
    ) -> None:
        synonyms_file = Path(synonyms_path) if synonyms_path else Path(__file__).with_name("synonyms.json")
        terms_file = Path(terms_path) if terms_path else Path(__file__).with_name("terms.json")
        self._synonyms = self._load_synonyms(synonyms_file)
        terms = self._load_json(terms_file)

        self.stop_words: frozenset[str] = frozenset(str(item).lower() for item in terms.get("stop_words", []))
        self.tech_keywords: frozenset[str] = frozenset(str(item).lower() for item in terms.get("tech_keywords", []))
        self.phrases: tuple[str, ...] = tuple(str(item).lower() for item in terms.get("phrases", []))
        self.resume_known_skills: tuple[str, ...] = tuple(str(item) for item in terms.get("resume_known_skills", []))
        self.jd_known_skills: tuple[str, ...] = tuple(str(item) for item in terms.get("jd_known_skills", []))
        self.case_sensitive_skills: frozenset[str] = frozenset(
            str(item) for item in terms.get("case_sensitive_skills", [])
        )
        self.skill_variations: dict[str, tuple[str, ...]] = {
            str(key).lower(): tuple(str(alt).lower() for alt in alts)
            for key, alts in (terms.get("skill_variations") or {}).items()
        }

    @staticmethod
    def _load_json(path: Path) -> dict[str, Any]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, dict):
            raise RuntimeError(f"Invalid taxonomy file '{path}': expected a top-level mapping.")
        return raw

    @classmethod
    def _load_synonyms(cls, path: Path) -> dict[str, str]:
        raw = cls._load_json(path)
        return {str(key).strip().lower(): str(value).strip().lower() for key, value in raw.items()}

    def normalize_skill(self, raw: str) -> str:
        normalized = " ".join(raw.strip().lower().split())
        return self._synonyms.get(normalized, normalized)

    def is_tech_term(self, token: str) -> bool:
        return token.lower() in self.tech_keywords or self.normalize_skill(token) in self.tech_keywords
