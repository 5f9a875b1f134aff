"""Toggle Archive use case."""

from datetime import datetime

from ...domain.entities.assessment_form import AssessmentForm, FormStatus
from ...domain.errors import FormNotFoundError
from ...domain.value_objects.node_id import FormId
from ..ports.repositories.assessment_form_repo import AssessmentFormRepository
from .get_assessment_form import load_active_form


class ToggleArchiveAssessmentFormUseCase:
    """Use case for archiving / unarchiving a form."""

    def __init__(self, form_repository: AssessmentFormRepository):
        self._form_repository = form_repository

    async def execute(self, form_id: str) -> AssessmentForm:
        """Execute the toggle archive use case.

        ``archived`` becomes ``active``; any other status, ``draft``
        included, becomes ``archived``.
        """
        form = await load_active_form(self._form_repository, form_id)

        if form.status == FormStatus.ARCHIVED.value:
            new_status = FormStatus.ACTIVE.value
        else:
            new_status = FormStatus.ARCHIVED.value

        updated = await self._form_repository.update_active(
            FormId(form.id), {"status": new_status, "updated_at": datetime.utcnow()}
        )
        if not updated:
            raise FormNotFoundError(form.id)
        return updated
