"""Duplicate Assessment Form use case."""

from datetime import datetime

from ...domain.entities.assessment_form import AssessmentForm, FormStatus
from ...domain.errors import FormValidationError, MalformedInputError
from ...domain.services.form_tree import clone_with_fresh_identity
from ...domain.services.validator import (
    DEFAULT_MAX_DEPTH,
    ValidationIssue,
    validate_form,
)
from ..dto.assessment_form_dto import DuplicateAssessmentFormRequest
from ..mappers.form_mapper import clean_text
from ..ports.repositories.assessment_form_repo import AssessmentFormRepository
from .get_assessment_form import load_active_form

COPY_SUFFIX = " (Copy)"


class DuplicateAssessmentFormUseCase:
    """Use case for copying a form under a new owner."""

    def __init__(
        self,
        form_repository: AssessmentFormRepository,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self._form_repository = form_repository
        self._max_depth = max_depth

    async def execute(self, request: DuplicateAssessmentFormRequest) -> AssessmentForm:
        """Execute the duplicate use case.

        Every node of the copy gets a fresh id. The copy starts as an unused
        draft and is validated before it is stored; an invalid copy is never
        persisted.
        """
        original = await load_active_form(self._form_repository, request.form_id)

        created_by = clean_text(request.created_by, "createdBy")
        now = datetime.utcnow()
        try:
            duplicate = clone_with_fresh_identity(
                original,
                max_depth=self._max_depth,
                title=f"{original.title}{COPY_SUFFIX}",
                created_by=created_by,
                status=FormStatus.DRAFT.value,
                usage_count=0,
                is_active=True,
                created_at=now,
                updated_at=now,
            )
        except MalformedInputError as e:
            raise FormValidationError([ValidationIssue("nestingDepth", e.message)])

        issues = validate_form(duplicate, self._max_depth)
        if issues:
            raise FormValidationError(issues)

        return await self._form_repository.add(duplicate)
