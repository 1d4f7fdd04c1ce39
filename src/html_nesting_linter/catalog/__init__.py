"""Nesting rule knowledge base."""

from __future__ import annotations

from .explicit import EXPLICIT_RULES
from .generated import DEFAULT_REFERENCES
from .generated import generate_rules
from .index import RuleIndex
from .index import build_rule_index
from .index import default_rule_index

__all__ = [
    "DEFAULT_REFERENCES",
    "EXPLICIT_RULES",
    "RuleIndex",
    "build_rule_index",
    "default_rule_index",
    "generate_rules",
]
