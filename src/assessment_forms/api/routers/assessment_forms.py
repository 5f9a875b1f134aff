"""Assessment form API endpoints.

Routes sit at the service root; the gateway strips its
``/api/assessment-forms`` prefix before proxying.
"""

import logging
from typing import List, NoReturn, Optional

from fastapi import APIRouter, HTTPException, Query, status

from assessment_forms.application.dto.assessment_form_dto import (
    CreateAssessmentFormRequest as CreateFormDTO,
    DuplicateAssessmentFormRequest as DuplicateFormDTO,
    ListAssessmentFormsRequest,
    UpdateAssessmentFormRequest as UpdateFormDTO,
)
from assessment_forms.application.use_cases.create_assessment_form import (
    CreateAssessmentFormUseCase,
)
from assessment_forms.application.use_cases.delete_assessment_form import (
    DeleteAssessmentFormUseCase,
)
from assessment_forms.application.use_cases.duplicate_assessment_form import (
    DuplicateAssessmentFormUseCase,
)
from assessment_forms.application.use_cases.get_assessment_form import (
    GetAssessmentFormUseCase,
)
from assessment_forms.application.use_cases.get_category_stats import (
    GetCategoryStatsUseCase,
)
from assessment_forms.application.use_cases.increment_usage import (
    IncrementUsageUseCase,
)
from assessment_forms.application.use_cases.list_assessment_forms import (
    ListAssessmentFormsUseCase,
)
from assessment_forms.application.use_cases.toggle_archive_assessment_form import (
    ToggleArchiveAssessmentFormUseCase,
)
from assessment_forms.application.use_cases.update_assessment_form import (
    UpdateAssessmentFormUseCase,
)
from assessment_forms.domain.errors import (
    DomainError,
    StorageUnavailableError,
)

from ..deps import FormRepositoryDep, MaxDepthDep, SettingsDep
from ..errors import domain_http_error
from ..schemas.assessment_form import (
    AssessmentFormResponse,
    CategoryStatSchema,
    CreateAssessmentFormRequest,
    DeleteAssessmentFormResponse,
    DuplicateAssessmentFormRequest,
    ErrorResponse,
    UpdateAssessmentFormRequest,
    UsageCountResponse,
)

router = APIRouter(tags=["assessment-forms"])
logger = logging.getLogger("assessment_forms")

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Assessment form not found"}}
INVALID = {400: {"model": ErrorResponse, "description": "Validation failed or malformed input"}}
SERVER_ERROR = {500: {"model": ErrorResponse, "description": "Storage unavailable or internal error"}}


def _raise_unexpected(operation: str, e: Exception, settings) -> NoReturn:
    """Log an unhandled error and raise a 500, hiding internals in production."""
    logger.error("Unhandled error in %s", operation, exc_info=True)
    details = {} if settings.is_production else {
        "exception": str(e) or repr(e),
        "type": e.__class__.__name__,
    }
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "details": details,
        },
    )


@router.get(
    "/",
    response_model=List[AssessmentFormResponse],
    status_code=status.HTTP_200_OK,
    responses={**SERVER_ERROR},
)
async def list_assessment_forms(
    form_repo: FormRepositoryDep,
    settings: SettingsDep,
    status_filter: Optional[str] = Query(None, alias="status"),
    category: Optional[str] = None,
    search: Optional[str] = None,
):
    """
    List active assessment forms.

    ``status`` and ``category`` are exact-match filters where ``all`` means
    no filter; ``search`` matches title or description, case-insensitively.
    Most recently updated forms come first.
    """
    try:
        use_case = ListAssessmentFormsUseCase(form_repo)
        forms = await use_case.execute(
            ListAssessmentFormsRequest(
                status=status_filter, category=category, search=search
            )
        )
        return [AssessmentFormResponse.from_domain(form) for form in forms]

    except StorageUnavailableError as e:
        logger.warning("Storage unavailable while listing forms: %s", e.details)
        raise domain_http_error(e)
    except Exception as e:
        _raise_unexpected("list_assessment_forms", e, settings)


# Declared before /{form_id} so "stats" is not taken for an id.
@router.get(
    "/stats/categories",
    response_model=List[CategoryStatSchema],
    status_code=status.HTTP_200_OK,
    responses={**SERVER_ERROR},
)
async def get_category_stats(form_repo: FormRepositoryDep, settings: SettingsDep):
    """Count active forms per taxonomy category, always all five in fixed order."""
    try:
        result = await GetCategoryStatsUseCase(form_repo).execute()
        return [
            CategoryStatSchema(name=stat.name, count=stat.count)
            for stat in result.categories
        ]

    except StorageUnavailableError as e:
        logger.warning("Storage unavailable while counting categories: %s", e.details)
        raise domain_http_error(e)
    except Exception as e:
        _raise_unexpected("get_category_stats", e, settings)


@router.get(
    "/{form_id}",
    response_model=AssessmentFormResponse,
    status_code=status.HTTP_200_OK,
    responses={**NOT_FOUND, **SERVER_ERROR},
)
async def get_assessment_form(
    form_id: str, form_repo: FormRepositoryDep, settings: SettingsDep
):
    """Fetch one active assessment form."""
    try:
        form = await GetAssessmentFormUseCase(form_repo).execute(form_id)
        return AssessmentFormResponse.from_domain(form)

    except DomainError as e:
        raise domain_http_error(e)
    except Exception as e:
        _raise_unexpected("get_assessment_form", e, settings)


@router.post(
    "/",
    response_model=AssessmentFormResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**INVALID, **SERVER_ERROR},
)
async def create_assessment_form(
    request: CreateAssessmentFormRequest,
    form_repo: FormRepositoryDep,
    max_depth: MaxDepthDep,
    settings: SettingsDep,
):
    """
    Create a new assessment form.

    This endpoint:
    1. Maps the submitted category tree onto the domain model
    2. Validates the whole form, reporting every violation
    3. Stores it as a draft (unless a status is given) with zero usage
    """
    try:
        payload = request.model_dump()
        dto_request = CreateFormDTO(
            title=payload["title"],
            description=payload["description"],
            category=payload["category"],
            categories=payload["categories"],
            created_by=payload["created_by"],
            status=payload["status"],
        )

        use_case = CreateAssessmentFormUseCase(form_repo, max_depth)
        form = await use_case.execute(dto_request)

        return AssessmentFormResponse.from_domain(form)

    except DomainError as e:
        raise domain_http_error(e)
    except Exception as e:
        _raise_unexpected("create_assessment_form", e, settings)


@router.put(
    "/{form_id}",
    response_model=AssessmentFormResponse,
    status_code=status.HTTP_200_OK,
    responses={**INVALID, **NOT_FOUND, **SERVER_ERROR},
)
async def update_assessment_form(
    form_id: str,
    request: UpdateAssessmentFormRequest,
    form_repo: FormRepositoryDep,
    max_depth: MaxDepthDep,
    settings: SettingsDep,
):
    """Apply a partial update; a submitted ``categories`` list replaces the tree."""
    try:
        dto_request = UpdateFormDTO(
            form_id=form_id, changes=request.model_dump(exclude_unset=True)
        )

        use_case = UpdateAssessmentFormUseCase(form_repo, max_depth)
        form = await use_case.execute(dto_request)

        return AssessmentFormResponse.from_domain(form)

    except DomainError as e:
        raise domain_http_error(e)
    except Exception as e:
        _raise_unexpected("update_assessment_form", e, settings)


@router.delete(
    "/{form_id}",
    response_model=DeleteAssessmentFormResponse,
    status_code=status.HTTP_200_OK,
    responses={**NOT_FOUND, **SERVER_ERROR},
)
async def delete_assessment_form(
    form_id: str, form_repo: FormRepositoryDep, settings: SettingsDep
):
    """Soft-delete a form. It disappears from every read afterwards."""
    try:
        await DeleteAssessmentFormUseCase(form_repo).execute(form_id)
        return DeleteAssessmentFormResponse(
            message="Assessment form deleted successfully"
        )

    except DomainError as e:
        raise domain_http_error(e)
    except Exception as e:
        _raise_unexpected("delete_assessment_form", e, settings)


@router.patch(
    "/{form_id}/archive",
    response_model=AssessmentFormResponse,
    status_code=status.HTTP_200_OK,
    responses={**NOT_FOUND, **SERVER_ERROR},
)
async def toggle_archive_assessment_form(
    form_id: str, form_repo: FormRepositoryDep, settings: SettingsDep
):
    """Archive a form, or restore an archived one to active."""
    try:
        form = await ToggleArchiveAssessmentFormUseCase(form_repo).execute(form_id)
        return AssessmentFormResponse.from_domain(form)

    except DomainError as e:
        raise domain_http_error(e)
    except Exception as e:
        _raise_unexpected("toggle_archive_assessment_form", e, settings)


@router.post(
    "/{form_id}/duplicate",
    response_model=AssessmentFormResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**INVALID, **NOT_FOUND, **SERVER_ERROR},
)
async def duplicate_assessment_form(
    form_id: str,
    request: DuplicateAssessmentFormRequest,
    form_repo: FormRepositoryDep,
    max_depth: MaxDepthDep,
    settings: SettingsDep,
):
    """
    Duplicate a form.

    The copy gets "(Copy)" appended to its title, fresh ids on every node,
    draft status and a zero usage count.
    """
    try:
        dto_request = DuplicateFormDTO(form_id=form_id, created_by=request.created_by)

        use_case = DuplicateAssessmentFormUseCase(form_repo, max_depth)
        form = await use_case.execute(dto_request)

        return AssessmentFormResponse.from_domain(form)

    except DomainError as e:
        raise domain_http_error(e)
    except Exception as e:
        _raise_unexpected("duplicate_assessment_form", e, settings)


@router.patch(
    "/{form_id}/use",
    response_model=UsageCountResponse,
    status_code=status.HTTP_200_OK,
    responses={**NOT_FOUND, **SERVER_ERROR},
)
async def increment_usage(
    form_id: str, form_repo: FormRepositoryDep, settings: SettingsDep
):
    """Record one more use of a form and return the new usage count."""
    try:
        result = await IncrementUsageUseCase(form_repo).execute(form_id)
        return UsageCountResponse(usage_count=result.usage_count)

    except DomainError as e:
        raise domain_http_error(e)
    except Exception as e:
        _raise_unexpected("increment_usage", e, settings)
