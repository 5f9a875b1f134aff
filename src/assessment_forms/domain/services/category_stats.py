"""Per-category usage statistics over the fixed form taxonomy."""

from dataclasses import dataclass
from typing import Dict, List, Mapping

from ..entities.assessment_form import FORM_CATEGORIES


@dataclass(frozen=True)
class CategoryStat:
    """Number of active forms filed under one taxonomy category."""

    name: str
    count: int

    def to_dict(self) -> Dict[str, object]:
        return {"name": self.name, "count": self.count}


def build_category_stats(counts: Mapping[str, int]) -> List[CategoryStat]:
    """Lay out raw per-category counts in the fixed taxonomy order.

    Categories missing from ``counts`` are reported with a count of zero;
    keys outside the taxonomy are ignored.
    """
    return [CategoryStat(name=name, count=int(counts.get(name, 0))) for name in FORM_CATEGORIES]
