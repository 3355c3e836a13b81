"""Unit tests for logfire configuration."""

from unittest.mock import patch

import pytest

from discuss.config import ObservabilitySettings, Settings
from discuss.util.observability import configure_logfire, logfire_options, should_send


class TestShouldSend:
    """Tests for should_send."""

    @pytest.mark.parametrize(
        ("token", "explicit", "expected"),
        [
            (None, None, False),
            ("tok", None, True),
            ("tok", False, False),
            (None, True, True),
        ],
    )
    def test_decision(self, token, explicit, expected):
        observability = ObservabilitySettings(
            logfire_token=token, send_to_logfire=explicit
        )

        assert should_send(observability) is expected


class TestLogfireOptions:
    """Tests for logfire_options."""

    def test_service_identity_comes_from_settings(self):
        settings = Settings(
            environment="staging",
            version="2.3.1",
            observability=ObservabilitySettings(service_name="discuss-worker"),
        )

        options = logfire_options(settings)

        assert options["service_name"] == "discuss-worker"
        assert options["service_version"] == "2.3.1"
        assert options["environment"] == "staging"

    def test_token_only_passed_when_set(self):
        without = logfire_options(
            Settings(observability=ObservabilitySettings(logfire_token=None))
        )
        with_token = logfire_options(
            Settings(observability=ObservabilitySettings(logfire_token="tok"))
        )

        assert "token" not in without
        assert with_token["token"] == "tok"
        assert with_token["send_to_logfire"] is True


class TestConfigureLogfire:
    """Tests for configure_logfire."""

    def test_configures_with_settings(self):
        settings = Settings(
            version="2.3.1",
            observability=ObservabilitySettings(
                service_name="discuss-worker", send_to_logfire=False
            ),
        )

        with patch("discuss.util.observability.logfire") as mock_logfire:
            configure_logfire(settings)

        kwargs = mock_logfire.configure.call_args.kwargs
        assert kwargs["service_name"] == "discuss-worker"
        assert kwargs["service_version"] == "2.3.1"
        assert kwargs["send_to_logfire"] is False
