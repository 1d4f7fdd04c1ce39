"""
Read-only (parent, child) -> rule lookup.

Built in two phases: generated rules are inserted first, then explicit rules
are overlaid with insert-or-overwrite. The overlay is the authoritative step,
so a hand-written explanation always replaces the generic generated one for
the same pair regardless of how the input lists happen to be ordered.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from collections.abc import Iterator
from functools import cache
from types import MappingProxyType

from ..types import NestingRule
from ..types import RuleCatalogError
from .explicit import EXPLICIT_RULES
from .generated import generate_rules

logger = logging.getLogger(__name__)


class RuleIndex:
    """
    Immutable mapping of `(parent, child)` to the authoritative rule.

    Safe to share between concurrent analysis calls: nothing mutates it after
    `__init__` returns.
    """

    __slots__ = ("_rules", "_explicit_keys", "_by_parent")

    def __init__(
        self,
        explicit: Iterable[NestingRule] = (),
        generated: Iterable[NestingRule] = (),
    ) -> None:
        table: dict[tuple[str, str], NestingRule] = {}
        for rule in generated:
            _check_rule(rule)
            table.setdefault(rule.key, rule)

        explicit_keys: set[tuple[str, str]] = set()
        for rule in explicit:
            _check_rule(rule)
            if rule.key in explicit_keys:
                raise RuleCatalogError(
                    f"Duplicate explicit rule for <{rule.parent}> > <{rule.child}>"
                )
            explicit_keys.add(rule.key)
            table[rule.key] = rule

        by_parent: dict[str, list[NestingRule]] = {}
        for rule in table.values():
            by_parent.setdefault(rule.parent, []).append(rule)

        self._rules = MappingProxyType(table)
        self._explicit_keys = frozenset(explicit_keys)
        self._by_parent = MappingProxyType(
            {parent: tuple(rules) for parent, rules in by_parent.items()}
        )

    def lookup(self, parent: str, child: str) -> NestingRule | None:
        return self._rules.get((parent, child))

    def is_explicit(self, parent: str, child: str) -> bool:
        return (parent, child) in self._explicit_keys

    def rules_for_parent(self, parent: str) -> tuple[NestingRule, ...]:
        return self._by_parent.get(parent, ())

    @property
    def parents(self) -> list[str]:
        return sorted(self._by_parent)

    @property
    def explicit_count(self) -> int:
        return len(self._explicit_keys)

    def __contains__(self, key: object) -> bool:
        return key in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[NestingRule]:
        return iter(self._rules.values())

    def __repr__(self) -> str:
        return f"RuleIndex(rules={len(self)}, explicit={self.explicit_count})"


def _check_rule(rule: NestingRule) -> None:
    if not isinstance(rule, NestingRule):
        raise RuleCatalogError(f"Expected NestingRule, got {type(rule).__name__}")


def build_rule_index(
    explicit: Iterable[NestingRule] | None = None,
    generated: Iterable[NestingRule] | None = None,
) -> RuleIndex:
    """
    Build a `RuleIndex`, defaulting to the bundled explicit and generated rules.
    """
    if explicit is None:
        explicit = EXPLICIT_RULES
    if generated is None:
        generated = generate_rules()

    index = RuleIndex(explicit=explicit, generated=generated)
    logger.debug(
        "Built rule index: %d rules (%d explicit)", len(index), index.explicit_count
    )
    return index


@cache
def default_rule_index() -> RuleIndex:
    """The process-wide index of bundled rules, built on first use."""
    return build_rule_index()
