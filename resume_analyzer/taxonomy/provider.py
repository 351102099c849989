from __future__ import annotations

from typing import Protocol


class TaxonomyProvider(Protocol):
    def normalize_skill(self, raw: str) -> str:
        """Return the canonical lowercase form of a skill name."""
