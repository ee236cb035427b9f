import pytest
from pydantic import ValidationError

from clinical_safety.config import Settings, get_settings


def test_defaults():
    settings = Settings()
    assert settings.ALLERGY_MATCHER == "substring"
    assert settings.LOG_LEVEL == "INFO"


def test_environment_prefix(monkeypatch):
    monkeypatch.setenv("CLINICAL_SAFETY_JSON_INDENT", "4")
    monkeypatch.setenv("CLINICAL_SAFETY_DEBUG", "true")
    settings = Settings()
    assert settings.JSON_INDENT == 4
    assert settings.DEBUG is True


def test_get_settings_cached():
    assert get_settings() is get_settings()


def test_allergy_matcher_choices(monkeypatch):
    monkeypatch.setenv("CLINICAL_SAFETY_ALLERGY_MATCHER", "token")
    assert Settings().ALLERGY_MATCHER == "token"


def test_unknown_allergy_matcher_rejected():
    with pytest.raises(ValidationError):
        Settings(ALLERGY_MATCHER="fuzzy")
