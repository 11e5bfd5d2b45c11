"""Tests for Sentry initialization guards and event filtering."""

from unittest.mock import patch

from lessonbook.core import sentry
from lessonbook.core.sentry import _filter_sensitive_data, init_sentry


class TestInitSentry:
    def test_no_dsn_skips_init(self, monkeypatch):
        monkeypatch.delenv("SENTRY_DSN", raising=False)
        monkeypatch.setattr(sentry, "_sentry_initialized", False)

        with patch("lessonbook.core.sentry.sentry_sdk.init") as mock_init:
            init_sentry()

        mock_init.assert_not_called()

    def test_placeholder_dsn_skips_init(self, monkeypatch):
        monkeypatch.setenv("SENTRY_DSN", "xxx")
        monkeypatch.setattr(sentry, "_sentry_initialized", False)

        with patch("lessonbook.core.sentry.sentry_sdk.init") as mock_init:
            init_sentry()

        mock_init.assert_not_called()

    def test_valid_dsn_initializes_once(self, monkeypatch):
        monkeypatch.setenv("SENTRY_DSN", "https://public@sentry.example.com/1")
        monkeypatch.setattr(sentry, "_sentry_initialized", False)

        with patch("lessonbook.core.sentry.sentry_sdk.init") as mock_init:
            init_sentry()
            init_sentry()

        mock_init.assert_called_once()
        assert mock_init.call_args.kwargs["send_default_pii"] is False


class TestFilterSensitiveData:
    def test_sql_extras_and_breadcrumbs_removed(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        event = {
            "extra": {"sql_statement": "SELECT * FROM bookings", "session_id": "abc"},
            "breadcrumbs": {
                "values": [
                    {"category": "sqlalchemy", "message": "UPDATE class_sessions"},
                    {"category": "http", "message": "GET /sessions"},
                ]
            },
        }

        filtered = _filter_sensitive_data(event, {})

        assert filtered["extra"] == {"session_id": "abc"}
        assert filtered["breadcrumbs"]["values"] == [{"category": "http", "message": "GET /sessions"}]

    def test_test_environment_passes_event_through(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "test")
        event = {"extra": {"sql": "SELECT 1"}}

        assert _filter_sensitive_data(event, {}) == {"extra": {"sql": "SELECT 1"}}
