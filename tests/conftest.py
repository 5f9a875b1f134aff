import pytest
from fastapi.testclient import TestClient

from assessment_forms.adapters.db.memory.assessment_form_repository import (
    InMemoryAssessmentFormRepository,
)
from assessment_forms.app import create_app
from assessment_forms.core.config import Settings


@pytest.fixture
def repo():
    return InMemoryAssessmentFormRepository()


@pytest.fixture
def test_settings():
    return Settings(storage_backend="memory", app_env="testing")


@pytest.fixture
def client(test_settings):
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client
