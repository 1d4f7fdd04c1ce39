from __future__ import annotations

from pathlib import Path

import pytest

from html_nesting_linter.catalog.index import RuleIndex
from html_nesting_linter.catalog.index import default_rule_index

TESTS_DIR = Path(__file__).resolve().parent


@pytest.fixture(scope="session")
def rule_index() -> RuleIndex:
    return default_rule_index()


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return TESTS_DIR / "fixtures"


@pytest.fixture(scope="session")
def goldens_dir() -> Path:
    return TESTS_DIR / "goldens"
