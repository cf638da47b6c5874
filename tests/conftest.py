from __future__ import annotations

import pytest

_ENV_VARS = (
    "TESTABLE_RESULT_FILE",
    "TESTABLE_REGION_NAME",
    "TESTABLE_GLOBAL_CLIENT_INDEX",
    "TESTABLE_ITERATION",
    "TESTABLE_SMOKE_TEST",
    "TESTABLE_LOG_LEVEL",
    "OUTPUT_DIR",
    "PROXY_AUTOCONFIG_URL",
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch, tmp_path) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a stray .env in the checkout from leaking into Settings().
    monkeypatch.chdir(tmp_path)
