"""
HTML Nesting Linter - Static detection of invalid element nesting.

Scans markup (plain HTML, JSX `return (...)` blocks, or single-file component
`<template>` blocks) for tags whose immediate parent forbids them, using a
lexical tag scanner and a catalog of explicit plus generated nesting rules.
"""

from __future__ import annotations

from .catalog.index import RuleIndex
from .catalog.index import build_rule_index
from .catalog.index import default_rule_index
from .types import Dialect
from .types import NestingRule
from .types import NestingViolation
from .types import Reference
from .validation.document import analyze
from .validation.document import analyze_for_language

__version__ = "0.1.0"

__all__ = [
    "Dialect",
    "NestingRule",
    "NestingViolation",
    "Reference",
    "RuleIndex",
    "analyze",
    "analyze_for_language",
    "build_rule_index",
    "default_rule_index",
]
