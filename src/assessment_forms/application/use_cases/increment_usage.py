"""Increment Usage use case."""

from ...domain.errors import FormNotFoundError
from ...domain.value_objects.node_id import FormId
from ..dto.assessment_form_dto import UsageCountResponse
from ..ports.repositories.assessment_form_repo import AssessmentFormRepository


class IncrementUsageUseCase:
    """Use case for recording one more use of a form."""

    def __init__(self, form_repository: AssessmentFormRepository):
        self._form_repository = form_repository

    async def execute(self, form_id: str) -> UsageCountResponse:
        """Execute the increment usage use case.

        The increment happens atomically in the store, so concurrent callers
        never lose an update.
        """
        try:
            fid = FormId(form_id)
        except ValueError:
            raise FormNotFoundError(str(form_id))

        usage_count = await self._form_repository.increment_usage(fid)
        if usage_count is None:
            raise FormNotFoundError(fid.value)

        return UsageCountResponse(form_id=fid.value, usage_count=usage_count)
