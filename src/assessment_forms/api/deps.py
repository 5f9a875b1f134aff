"""FastAPI dependency providers.

The form repository is built once per application from configuration and
kept on ``app.state``; routes receive it through ``FormRepositoryDep``.
"""

from typing import Annotated

from fastapi import Depends, Request

from assessment_forms.adapters.db.memory.assessment_form_repository import (
    InMemoryAssessmentFormRepository,
)
from assessment_forms.adapters.db.mongo.repositories.assessment_form_repository import (
    MongoAssessmentFormRepository,
)
from assessment_forms.application.ports.repositories.assessment_form_repo import (
    AssessmentFormRepository,
)
from assessment_forms.core.config import Settings


def build_form_repository(settings: Settings) -> AssessmentFormRepository:
    """Create the repository selected by ``settings.storage_backend``."""
    if settings.uses_mongo:
        return MongoAssessmentFormRepository()
    return InMemoryAssessmentFormRepository()


def get_settings_from_app(request: Request) -> Settings:
    """Get the settings the running application was created with."""
    return request.app.state.settings


def get_form_repository(request: Request) -> AssessmentFormRepository:
    """Get the application's form repository."""
    return request.app.state.form_repository


def get_max_nesting_depth(request: Request) -> int:
    """Get the configured sub-question nesting guard."""
    return request.app.state.settings.max_nesting_depth


# Dependency annotations for FastAPI
SettingsDep = Annotated[Settings, Depends(get_settings_from_app)]
FormRepositoryDep = Annotated[AssessmentFormRepository, Depends(get_form_repository)]
MaxDepthDep = Annotated[int, Depends(get_max_nesting_depth)]
