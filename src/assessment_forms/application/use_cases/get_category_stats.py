"""Get Category Stats use case."""

from ...domain.services.category_stats import build_category_stats
from ..dto.assessment_form_dto import CategoryStatDTO, CategoryStatsResponse
from ..ports.repositories.assessment_form_repo import AssessmentFormRepository


class GetCategoryStatsUseCase:
    """Use case for counting active forms per taxonomy category."""

    def __init__(self, form_repository: AssessmentFormRepository):
        self._form_repository = form_repository

    async def execute(self) -> CategoryStatsResponse:
        """Execute the category stats use case.

        Always returns all five categories in taxonomy order.
        """
        counts = await self._form_repository.count_active_by_category()
        stats = build_category_stats(counts)
        return CategoryStatsResponse(
            categories=[CategoryStatDTO(name=s.name, count=s.count) for s in stats]
        )
