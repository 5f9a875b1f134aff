import pytest
from pydantic import ValidationError

from assessment_forms.core.config import (
    MONGO_MAX_NESTING_DEPTH,
    CORSSettings,
    FormSettings,
    Settings,
)


def test_storage_backend_is_validated():
    assert Settings(storage_backend="MEMORY").storage_backend == "memory"
    with pytest.raises(ValidationError):
        Settings(storage_backend="redis")


def test_environment_flags():
    settings = Settings(app_env="Production", storage_backend="memory")

    assert settings.is_production
    assert not settings.is_testing
    assert not settings.uses_mongo


def test_nesting_depth_bounds():
    assert FormSettings(max_nesting_depth=10).max_nesting_depth == 10
    with pytest.raises(ValidationError):
        FormSettings(max_nesting_depth=0)


def test_cors_origins_from_comma_list():
    cors = CORSSettings(allowed_origins="http://a.test, http://b.test")

    assert cors.allowed_origins == ["http://a.test", "http://b.test"]


def test_nesting_depth_from_environment(monkeypatch):
    monkeypatch.setenv("FORMS_MAX_NESTING_DEPTH", "7")

    assert Settings().forms.max_nesting_depth == 7


def test_mongo_backend_caps_nesting_depth():
    deep = FormSettings(max_nesting_depth=50)

    assert Settings(storage_backend="mongo", forms=deep).max_nesting_depth == MONGO_MAX_NESTING_DEPTH
    assert Settings(storage_backend="memory", forms=deep).max_nesting_depth == 50
    shallow = FormSettings(max_nesting_depth=10)
    assert Settings(storage_backend="mongo", forms=shallow).max_nesting_depth == 10
