"""Pytest configuration and shared fixtures for DRL parser tests."""

import sys
from pathlib import Path

import pytest

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).parent.parent))

from drl_parser import parse, parse_with_diagnostics, standard_layers

HEADER = "version 20200610\n"


@pytest.fixture
def layers():
    """Layer table of a four-layer board."""
    return standard_layers(4)


@pytest.fixture
def parse_snippet(layers):
    """Parse rule text (header added) and return a RuleModel."""
    def _parse(text, **kw):
        return parse(HEADER + text, layers, filename="<test>", **kw)
    return _parse


@pytest.fixture
def parse_snippet_with_warnings(layers):
    """Parse rule text (header included by caller) and return (model, warnings)."""
    def _parse(text, **kw):
        return parse_with_diagnostics(text, layers, filename="<test>", **kw)
    return _parse


@pytest.fixture
def rule_file(tmp_path):
    """Write rule text to a temporary .drl file and return its path."""
    def _write(text, name="board.drl"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
