"""Update Assessment Form use case."""

from datetime import datetime

from ...domain.entities.assessment_form import AssessmentForm
from ...domain.errors import FormNotFoundError, FormValidationError
from ...domain.services.validator import DEFAULT_MAX_DEPTH, validate_partial
from ...domain.value_objects.node_id import FormId
from ..dto.assessment_form_dto import UpdateAssessmentFormRequest
from ..mappers.form_mapper import changes_from_payload
from ..ports.repositories.assessment_form_repo import AssessmentFormRepository
from .get_assessment_form import load_active_form


class UpdateAssessmentFormUseCase:
    """Use case for partially updating a form."""

    def __init__(
        self,
        form_repository: AssessmentFormRepository,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self._form_repository = form_repository
        self._max_depth = max_depth

    async def execute(self, request: UpdateAssessmentFormRequest) -> AssessmentForm:
        """Execute the update form use case.

        Present fields replace the stored ones verbatim; a present
        ``categories`` list replaces the whole tree. Fields that were not
        sent are never written back.
        """
        changes = changes_from_payload(request.changes, self._max_depth)

        form = await load_active_form(self._form_repository, request.form_id)

        issues = validate_partial(changes, self._max_depth)
        if issues:
            raise FormValidationError(issues)

        changes["updated_at"] = datetime.utcnow()
        updated = await self._form_repository.update_active(FormId(form.id), changes)
        if not updated:
            raise FormNotFoundError(form.id)
        return updated
