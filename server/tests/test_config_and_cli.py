import os

import pytest

from antd_rush import run
from antd_rush.config import LANGUAGE_ENV_VAR, DocLanguage, RushConfig, resolve_language


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("en", DocLanguage.EN),
        ("English", DocLanguage.EN),
        ("zh", DocLanguage.ZH),
        (" ZH-CN ", DocLanguage.ZH),
        ("中文", DocLanguage.ZH),
        ("fr", DocLanguage.EN),
        ("", DocLanguage.EN),
        (None, DocLanguage.EN),
    ],
)
def test_resolve_language(raw, expected):
    assert resolve_language(raw) == expected


def test_config_from_env(monkeypatch):
    monkeypatch.setenv(LANGUAGE_ENV_VAR, "chinese")
    assert RushConfig.from_env().language == DocLanguage.ZH

    monkeypatch.delenv(LANGUAGE_ENV_VAR)
    assert RushConfig.from_env().language == DocLanguage.EN


def test_cli_exports_language_and_starts_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(run.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    # Registers the variable with monkeypatch so main()'s write is undone afterwards
    monkeypatch.setenv(LANGUAGE_ENV_VAR, "en")

    run.main(["--port", "9123", "--language", "中文", "--log-level", "warning"])

    assert os.environ[LANGUAGE_ENV_VAR] == "zh"
    app, kwargs = calls[0]
    assert app == "antd_rush.main:app"
    assert kwargs["port"] == 9123
    assert kwargs["log_level"] == "warning"


def test_cli_rejects_unknown_log_level():
    with pytest.raises(SystemExit):
        run.build_parser().parse_args(["--log-level", "loud"])
