import logging

import pytest

from resource_scheduler.core.config import Settings, get_settings
from resource_scheduler.core.errors import ProjectNotFoundError, ResourceNotFoundError, SchedulerError
from resource_scheduler.core.logging import configure_logging


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESOURCE_SCHEDULER_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("RESOURCE_SCHEDULER_LOG_LEVEL", "DEBUG")

    settings = Settings()

    assert settings.database_url == "sqlite+aiosqlite:///:memory:"
    assert settings.log_level == "DEBUG"
    assert settings.utilization_preset == "custom"


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


def test_configure_logging_sets_level(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging("WARNING")

    assert calls[0]["level"] == "WARNING"
    assert "%(name)s" in calls[0]["format"]


def test_lookup_errors_carry_ids() -> None:
    error = ResourceNotFoundError(7)

    assert isinstance(error, SchedulerError)
    assert isinstance(error, LookupError)
    assert error.resource_id == 7
    assert str(ProjectNotFoundError(3)) == "Project not found: 3"
