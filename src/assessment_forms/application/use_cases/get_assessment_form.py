"""Get Assessment Form use case."""

from ...domain.entities.assessment_form import AssessmentForm
from ...domain.errors import FormNotFoundError
from ...domain.value_objects.node_id import FormId
from ..ports.repositories.assessment_form_repo import AssessmentFormRepository


async def load_active_form(
    form_repository: AssessmentFormRepository, form_id: str
) -> AssessmentForm:
    """Fetch an active form or raise ``FormNotFoundError``."""
    try:
        fid = FormId(form_id)
    except ValueError:
        raise FormNotFoundError(str(form_id))

    form = await form_repository.find_active_by_id(fid)
    if not form:
        raise FormNotFoundError(fid.value)
    return form


class GetAssessmentFormUseCase:
    """Use case for fetching a single active form."""

    def __init__(self, form_repository: AssessmentFormRepository):
        self._form_repository = form_repository

    async def execute(self, form_id: str) -> AssessmentForm:
        """Execute the get form use case."""
        return await load_active_form(self._form_repository, form_id)
