"""Delete Assessment Form use case (soft delete)."""

from datetime import datetime

from ...domain.errors import FormNotFoundError
from ...domain.value_objects.node_id import FormId
from ..ports.repositories.assessment_form_repo import AssessmentFormRepository
from .get_assessment_form import load_active_form


class DeleteAssessmentFormUseCase:
    """Use case for soft-deleting a form.

    The form is only flagged inactive; its status is left alone.
    """

    def __init__(self, form_repository: AssessmentFormRepository):
        self._form_repository = form_repository

    async def execute(self, form_id: str) -> str:
        """Execute the delete use case. Returns the deleted form's id."""
        form = await load_active_form(self._form_repository, form_id)

        deleted = await self._form_repository.update_active(
            FormId(form.id), {"is_active": False, "updated_at": datetime.utcnow()}
        )
        if not deleted:
            raise FormNotFoundError(form.id)

        return deleted.id
