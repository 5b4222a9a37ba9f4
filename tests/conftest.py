"""
Pytest configuration and shared fixtures for the annotator tests.
"""

import pytest

from config.code_dictionary import CodeDictionary
from core.translator import LineTranslator


@pytest.fixture
def dictionary():
    """Fresh default dictionary for each test, so merges never leak."""
    return CodeDictionary.default()


@pytest.fixture
def translator(dictionary):
    return LineTranslator(dictionary)


@pytest.fixture
def settings_home(tmp_path, monkeypatch):
    """Point the settings directory at a temporary location."""
    monkeypatch.setenv("CNC_ANNOTATOR_HOME", str(tmp_path))
    return tmp_path
