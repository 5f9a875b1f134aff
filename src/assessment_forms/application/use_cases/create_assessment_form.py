"""Create Assessment Form use case."""

from ...domain.entities.assessment_form import AssessmentForm, FormStatus
from ...domain.errors import FormValidationError
from ...domain.services.validator import DEFAULT_MAX_DEPTH, validate_form
from ..dto.assessment_form_dto import CreateAssessmentFormRequest
from ..mappers.form_mapper import categories_from_payload, clean_text
from ..ports.repositories.assessment_form_repo import AssessmentFormRepository


class CreateAssessmentFormUseCase:
    """Use case for creating a new assessment form."""

    def __init__(
        self,
        form_repository: AssessmentFormRepository,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self._form_repository = form_repository
        self._max_depth = max_depth

    async def execute(self, request: CreateAssessmentFormRequest) -> AssessmentForm:
        """Execute the create form use case.

        Runs full validation; nothing is stored unless the form is valid.
        """
        categories = categories_from_payload(request.categories, self._max_depth)

        form = AssessmentForm(
            title=clean_text(request.title, "title"),
            description=clean_text(request.description, "description"),
            category=request.category,
            categories=categories,
            created_by=clean_text(request.created_by, "createdBy"),
            status=request.status or FormStatus.DRAFT.value,
        )

        issues = validate_form(form, self._max_depth)
        if issues:
            raise FormValidationError(issues)

        return await self._form_repository.add(form)
