"""Unit tests for configuration parsing."""

import pytest

from thinking_control import config
from thinking_control.config import PipelineConfig, parse_bool, parse_int


class TestParseHelpers:
    """External flag parsing never raises."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "on", True])
    def test_true_values(self, value):
        """Truthy spellings."""
        assert parse_bool(value, False) is True

    @pytest.mark.parametrize("value", ["false", "False", "0", "no", "off", False])
    def test_false_values(self, value):
        """Falsy spellings."""
        assert parse_bool(value, True) is False

    @pytest.mark.parametrize("value", [None, "maybe", ""])
    def test_unknown_uses_default(self, value):
        """Unknown values keep the default."""
        assert parse_bool(value, True) is True
        assert parse_bool(value, False) is False

    def test_parse_int(self):
        """Integers parse; junk falls back."""
        assert parse_int("42", 3) == 42
        assert parse_int(" 7 ", 3) == 7
        assert parse_int("seven", 3) == 3
        assert parse_int(None, 3) == 3
        assert parse_int("", 3) == 3
        assert parse_int(True, 3) == 3


class TestDefaults:
    """Documented defaults."""

    def test_constants(self):
        """Thresholds and messages."""
        assert config.LOW_BUDGET_THRESHOLD == 2048
        assert config.MEDIUM_BUDGET_THRESHOLD == 8192
        assert config.LOOP_CORRECTION_MESSAGE == "Planning loop detected. Execute action now."
        assert config.ENGLISH_INSTRUCTION.startswith("CRITICAL: You MUST respond in English only")


class TestPipelineConfig:
    """Typed settings construction."""

    def test_from_env(self, monkeypatch):
        """Environment variables are read at call time."""
        monkeypatch.setenv("CCS_GLMT_FORCE_ENGLISH", "false")
        monkeypatch.setenv("CCS_GLMT_THINKING_BUDGET", "unlimited")
        monkeypatch.setenv("CCS_GLMT_DEFAULT_BUDGET", "4096")
        monkeypatch.setenv("CCS_GLMT_LOOP_THRESHOLD", "5")
        monkeypatch.setenv("CCS_GLMT_THINKING_FIELD", "reasoning")

        settings = PipelineConfig.from_env()

        assert settings.force_english is False
        assert settings.thinking_budget == "unlimited"
        assert settings.default_budget == 4096
        assert settings.loop_threshold == 5
        assert settings.thinking_field == "reasoning"

    def test_from_env_defaults(self, monkeypatch):
        """Unset variables use defaults."""
        for name in ("CCS_GLMT_FORCE_ENGLISH", "CCS_GLMT_THINKING_BUDGET", "CCS_GLMT_DEFAULT_BUDGET",
                     "CCS_GLMT_LOOP_THRESHOLD", "CCS_GLMT_THINKING_FIELD"):
            monkeypatch.delenv(name, raising=False)

        settings = PipelineConfig.from_env()

        assert settings.force_english is True
        assert settings.thinking_budget is None
        assert settings.default_budget == 8192
        assert settings.loop_threshold == 3
        assert settings.thinking_field == "thinking"

    def test_from_env_invalid_values(self, monkeypatch):
        """Bad values fall back instead of raising."""
        monkeypatch.setenv("CCS_GLMT_FORCE_ENGLISH", "sometimes")
        monkeypatch.setenv("CCS_GLMT_DEFAULT_BUDGET", "-10")
        monkeypatch.setenv("CCS_GLMT_LOOP_THRESHOLD", "0")

        settings = PipelineConfig.from_env()

        assert settings.force_english is True
        assert settings.default_budget == config.DEFAULT_THINKING_BUDGET
        assert settings.loop_threshold == config.LOOP_DETECTION_THRESHOLD

    def test_from_dict_strings(self):
        """String settings are converted to typed values."""
        settings = PipelineConfig.from_dict({
            "force_english": "no",
            "thinking_budget": "2048",
            "loop_threshold": "4",
            "custom_keywords": {"execution": ["ship"]},
        })

        assert settings.force_english is False
        assert settings.thinking_budget == "2048"
        assert settings.loop_threshold == 4
        assert settings.custom_keywords == {"execution": ["ship"]}

    def test_from_dict_bad_threshold(self):
        """Junk thresholds fall back to the default."""
        assert PipelineConfig.from_dict({"loop_threshold": "many"}).loop_threshold == config.LOOP_DETECTION_THRESHOLD
        assert PipelineConfig.from_dict({"loop_threshold": -2}).loop_threshold == config.LOOP_DETECTION_THRESHOLD

    def test_to_dict_round_trip(self):
        """to_dict feeds back into the constructor."""
        original = PipelineConfig(force_english=False, thinking_budget=1024, default_budget=4096,
                                  loop_threshold=2, thinking_field="x")
        assert PipelineConfig(**original.to_dict()) == original
