"""
Tests for the command-line demo in `demo_cli.py`.
"""

from __future__ import annotations

import pytest

from demo_cli import main


def test_classify(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["classify", "75", "--age", "30"]) == 0
    out = capsys.readouterr().out
    assert "medium" in out
    assert "medio" in out


def test_classify_invalid_heart_rate(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["classify", "300"]) == 2
    assert "Invalid heart rate" in capsys.readouterr().out


def test_measure(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["measure", "--duration", "5", "--seed", "4"]) == 0
    out = capsys.readouterr().out
    assert "RESULTS" in out
    assert "BPM" in out


def test_requires_command() -> None:
    with pytest.raises(SystemExit):
        main([])
