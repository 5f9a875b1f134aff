"""List Assessment Forms use case."""

from typing import List, Optional

from ...domain.entities.assessment_form import AssessmentForm
from ..dto.assessment_form_dto import ListAssessmentFormsRequest
from ..ports.repositories.assessment_form_repo import AssessmentFormRepository

ALL = "all"


def _filter_value(value: Optional[str]) -> Optional[str]:
    if value is None or value == "" or value == ALL:
        return None
    return value


class ListAssessmentFormsUseCase:
    """Use case for listing active forms with optional filters."""

    def __init__(self, form_repository: AssessmentFormRepository):
        self._form_repository = form_repository

    async def execute(self, request: ListAssessmentFormsRequest) -> List[AssessmentForm]:
        """Execute the list forms use case.

        Status and category are exact-match filters applied by the store; the
        text search runs afterwards as a case-insensitive substring match on
        title or description. Most recently updated forms come first.
        """
        forms = await self._form_repository.find_active(
            status=_filter_value(request.status),
            category=_filter_value(request.category),
        )

        if request.search:
            needle = request.search.lower()
            forms = [
                form
                for form in forms
                if needle in form.title.lower() or needle in form.description.lower()
            ]

        return forms
