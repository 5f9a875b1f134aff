"""DTOs for assessment form use cases."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class CreateAssessmentFormRequest:
    """Request DTO for creating a form.

    ``categories`` is plain data (lists and dicts) as received from the
    caller; it is mapped onto the domain tree by the use case.
    """

    title: str
    description: str
    category: str
    categories: Any
    created_by: str
    status: Optional[str] = None


@dataclass
class UpdateAssessmentFormRequest:
    """Request DTO for a partial update.

    ``changes`` only holds the fields the caller actually sent.
    """

    form_id: str
    changes: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ListAssessmentFormsRequest:
    """Request DTO for listing forms. ``"all"`` disables a filter."""

    status: Optional[str] = None
    category: Optional[str] = None
    search: Optional[str] = None


@dataclass
class DuplicateAssessmentFormRequest:
    """Request DTO for duplicating a form."""

    form_id: str
    created_by: str


@dataclass
class UsageCountResponse:
    """Response DTO for a usage increment."""

    form_id: str
    usage_count: int


@dataclass
class CategoryStatDTO:
    """DTO for one category statistics entry."""

    name: str
    count: int


@dataclass
class CategoryStatsResponse:
    """Response DTO for category statistics."""

    categories: List[CategoryStatDTO]
