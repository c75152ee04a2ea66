"""
Matches generated ingredient and equipment names back to catalog IDs.

Matching is case-insensitive exact equality against the catalog subset that
was offered in the prompt. Names that do not match are reported as unmatched
and simply left out of the persisted relations; a backend occasionally
rephrases or invents a name and the recipe is still kept.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol

from mixr.core.logging import get_logger

logger = get_logger("services.reconciler")


class CatalogEntry(Protocol):
    id: int
    name: str


@dataclass(frozen=True)
class ReconciledName:
    name: str
    catalog_id: Optional[int]

    @property
    def matched(self) -> bool:
        return self.catalog_id is not None


def _normalize(name: str) -> str:
    return name.strip().lower()


def build_name_index(catalog: Iterable[CatalogEntry]) -> Dict[str, int]:
    """Map normalized catalog names to IDs; the first entry wins on duplicates."""
    index: Dict[str, int] = {}
    for entry in catalog:
        index.setdefault(_normalize(entry.name), entry.id)
    return index


def reconcile_names(
    names: Iterable[str],
    catalog: Iterable[CatalogEntry],
    kind: str = "item"
) -> List[ReconciledName]:
    """
    Reconcile generated names against a catalog subset.

    Args:
        names: Names as produced by the generator, in generation order
        catalog: Catalog entries offered to the generator
        kind: Label used in log messages ("ingredient", "equipment")

    Returns:
        One ReconciledName per input name, in input order
    """
    index = build_name_index(catalog)
    results = [ReconciledName(name=name, catalog_id=index.get(_normalize(name))) for name in names]

    unmatched = [r.name for r in results if not r.matched]
    if unmatched:
        logger.info(f"Dropping {len(unmatched)} unmatched {kind} name(s): {unmatched}")

    return results
