from functools import lru_cache

from .local_taxonomy import LocalTaxonomy
from .provider import TaxonomyProvider


@lru_cache(maxsize=1)
def get_default_taxonomy_provider() -> LocalTaxonomy:
    return LocalTaxonomy()


def normalize_skill(name: str) -> str:
    """Canonical lowercase form of a skill name ("ReactJS" -> "react", "k8s" -> "kubernetes")."""
    return get_default_taxonomy_provider().normalize_skill(name)


__all__ = ["TaxonomyProvider", "LocalTaxonomy", "get_default_taxonomy_provider", "normalize_skill"]
