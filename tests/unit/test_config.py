from __future__ import annotations

import pytest
from pydantic import ValidationError

from ci_optimizer.config import OptimizerConfig
from ci_optimizer.constants import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT_SECONDS


def test_config_loads_defaults_and_masks(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("INPUT_GRAPHITE_TOKEN", "gt_test_dummy")
    cfg = OptimizerConfig()

    assert cfg.endpoint == DEFAULT_ENDPOINT
    assert cfg.timeout == DEFAULT_TIMEOUT_SECONDS
    assert cfg.pr_number == ""
    assert cfg.pr_override is None
    assert cfg.graphite_token.get_secret_value() == "gt_test_dummy"
    assert "gt_test_dummy" not in repr(cfg)


def test_config_blank_inputs_use_defaults(clean_env: pytest.MonkeyPatch) -> None:
    # The runner always sets declared inputs, using "" when nothing was passed.
    clean_env.setenv("INPUT_ENDPOINT", "")
    clean_env.setenv("INPUT_TIMEOUT", "  ")
    clean_env.setenv("INPUT_PR_NUMBER", "")
    cfg = OptimizerConfig()

    assert cfg.endpoint == DEFAULT_ENDPOINT
    assert cfg.timeout == DEFAULT_TIMEOUT_SECONDS
    assert cfg.pr_override is None


def test_config_parses_numeric_inputs(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("INPUT_TIMEOUT", "5")
    clean_env.setenv("INPUT_PR_NUMBER", "42")
    cfg = OptimizerConfig()

    assert cfg.timeout == 5
    assert cfg.timeout_ms == 5000
    assert cfg.pr_override == 42


def test_optimizer_url_strips_trailing_slash(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("INPUT_ENDPOINT", "https://graphite.example.com/")
    cfg = OptimizerConfig()

    assert cfg.optimizer_url == "https://graphite.example.com/api/v1/ci/optimizer"


@pytest.mark.parametrize("value", ["abc", "0", "-3"])
def test_invalid_timeout_raises(clean_env: pytest.MonkeyPatch, value: str) -> None:
    clean_env.setenv("INPUT_TIMEOUT", value)

    with pytest.raises(ValidationError):
        OptimizerConfig()


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("abc", None),
        ("#42", None),
        ("0", 0),
        (" 42 ", 42),
        ("42abc", 42),
        ("-3", -3),
    ],
)
def test_pr_number_is_parsed_leniently(clean_env: pytest.MonkeyPatch, value: str, expected) -> None:
    clean_env.setenv("INPUT_PR_NUMBER", value)
    cfg = OptimizerConfig()

    assert cfg.pr_override == expected


def test_endpoint_requires_http_scheme(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("INPUT_ENDPOINT", "graphite.example.com")

    with pytest.raises(ValidationError):
        OptimizerConfig()


def test_config_is_frozen(clean_env: pytest.MonkeyPatch) -> None:
    cfg = OptimizerConfig()

    # Pydantic 2.x raises ValidationError for frozen models
    with pytest.raises((TypeError, ValidationError)):
        cfg.timeout = 10
