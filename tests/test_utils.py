"""Copyright (c) 2024 Pixelgen Technologies AB."""

import importlib.util
import logging
from pathlib import Path

from cramsqs import __version__
from cramsqs.utils import click_echo, log_step_start

ROOT_DIR = Path(__file__).parent.parent


def test_log_step_start(caplog):
    with caplog.at_level(logging.INFO):
        log_step_start(
            "summary", input_files=["a.cram", "b.cram"], output="a.sqs", max_files=10
        )

    assert f"Start cram-sqs summary {__version__}" in caplog.text
    assert "Input file(s) a.cram,b.cram" in caplog.text
    assert "Output a.sqs" in caplog.text
    assert "Parameters:max-files=10" in caplog.text


def test_click_echo(capsys):
    click_echo("to stdout")
    click_echo("to stderr", err=True)

    captured = capsys.readouterr()
    assert captured.out == "to stdout\n"
    assert captured.err == "to stderr\n"


def test_all_sources_have_copyright():
    spec = importlib.util.spec_from_file_location(
        "check_copyright", ROOT_DIR / "utils" / "check_copyright.py"
    )
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    missing = [str(error.file) for error in module.find_missing(None)]

    assert missing == []
