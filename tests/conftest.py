from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_user_environment(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep a developer's real ~/.config/dotkit and DOTKIT_CONFIG__* out of tests
    base = tmp_path_factory.mktemp("xdg")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(base / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(base / "data"))
    for key in list(os.environ):
        if key.startswith("DOTKIT_CONFIG__"):
            monkeypatch.delenv(key, raising=False)
