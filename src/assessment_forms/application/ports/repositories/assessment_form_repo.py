"""Assessment form repository interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ....domain.entities.assessment_form import AssessmentForm
from ....domain.value_objects.node_id import FormId

# Fields update_active may write.
EDITABLE_FIELDS = (
    "title",
    "description",
    "category",
    "status",
    "categories",
    "is_active",
    "updated_at",
)


class AssessmentFormRepository(ABC):
    """Abstract storage for assessment form documents.

    Each form is stored as one document. Lookups only ever return active
    forms: a soft-deleted form is indistinguishable from a missing one.
    Implementations raise ``StorageUnavailableError`` when the backing store
    cannot be reached or times out.
    """

    @abstractmethod
    async def add(self, form: AssessmentForm) -> AssessmentForm:
        """Insert a new form, assigning its id. Returns the stored form."""
        pass

    @abstractmethod
    async def update_active(
        self, form_id: FormId, fields: Dict[str, Any]
    ) -> Optional[AssessmentForm]:
        """Set the given fields on an active form and return the result.

        Only the named fields are written. Returns None when no active form
        has this id, so a form soft-deleted in the meantime stays deleted.
        ``usage_count`` is only ever changed by ``increment_usage``.
        """
        pass

    @abstractmethod
    async def find_active_by_id(self, form_id: FormId) -> Optional[AssessmentForm]:
        """Find an active form by ID."""
        pass

    @abstractmethod
    async def find_active(
        self, status: Optional[str] = None, category: Optional[str] = None
    ) -> List[AssessmentForm]:
        """Find active forms matching exact status / category, newest update first."""
        pass

    @abstractmethod
    async def increment_usage(self, form_id: FormId) -> Optional[int]:
        """Atomically add one to an active form's usage count.

        Returns the new count, or None when no active form has this id.
        """
        pass

    @abstractmethod
    async def count_active_by_category(self) -> Dict[str, int]:
        """Count active forms grouped by taxonomy category."""
        pass
