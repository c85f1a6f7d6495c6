"""Smoke tests for the command-line entry point."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from colonynet.__main__ import main


def test_main_module_importable() -> None:
    """The __main__ module is importable and exposes main()."""
    assert callable(main)


def test_main_runs_headless(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A short session runs to completion and logs the ledger."""
    config = tmp_path / "quick.yaml"
    config.write_text("seed: 3\nstarting_cargo:\n  silicon: 40\n  stone: 50\n")
    monkeypatch.setattr(
        sys,
        "argv",
        ["colonynet", "--config", str(config), "--seconds", "1"],
    )
    with caplog.at_level("INFO", logger="colonynet"):
        main()
    assert "power=" in caplog.text
