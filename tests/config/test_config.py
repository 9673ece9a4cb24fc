from __future__ import annotations

import logging
from collections.abc import Iterator  # noqa: TC003

import pytest

from edgewaf.config import (
    SIGSCI_API_ROOT,
    MissingConfigurationError,
    WafApiConfig,
    configure_logging,
    get_waf_api_config,
    optional_env_var,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("MISSING_B", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_optional_env_var_falls_back_on_blank(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  ")

    assert optional_env_var("EXAMPLE_VAR", "fallback") == "fallback"


def test_waf_config_reads_corp_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIGSCI_CORP", "acme")
    monkeypatch.delenv("SIGSCI_API_ROOT", raising=False)

    config = get_waf_api_config()

    assert config.corp_name == "acme"
    assert config.api_root == SIGSCI_API_ROOT
    assert config.corp_url == f"{SIGSCI_API_ROOT}/corps/acme"
    assert config.http.ratelimit is not None


def test_waf_config_honours_api_root_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIGSCI_CORP", "acme")
    monkeypatch.setenv("SIGSCI_API_ROOT", "https://waf.test/api/v0/")

    config = WafApiConfig.from_environment()

    assert config.corp_url == "https://waf.test/api/v0/corps/acme"


def test_waf_config_requires_corp(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SIGSCI_CORP", raising=False)

    with pytest.raises(MissingConfigurationError, match="SIGSCI_CORP"):
        WafApiConfig.from_environment()


def test_missing_configuration_error_keeps_sorted_names() -> None:
    error = MissingConfigurationError(["SIGSCI_CORP", "SIGSCI_API_ROOT"])

    assert error.names == ("SIGSCI_API_ROOT", "SIGSCI_CORP")
    assert str(error) == "Missing configuration for: SIGSCI_API_ROOT, SIGSCI_CORP"


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_reads_level_from_environment(
    monkeypatch: pytest.MonkeyPatch, restore_root_logger: logging.Logger
) -> None:
    monkeypatch.setenv("EDGEWAF_LOG_LEVEL", "debug")

    configure_logging(force=True)

    assert restore_root_logger.level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING


def test_configure_logging_prefers_explicit_level(
    monkeypatch: pytest.MonkeyPatch, restore_root_logger: logging.Logger
) -> None:
    monkeypatch.setenv("EDGEWAF_LOG_LEVEL", "DEBUG")

    configure_logging(level=logging.ERROR, force=True)

    assert restore_root_logger.level == logging.ERROR
