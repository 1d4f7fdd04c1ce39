"""
Shared types for rule catalog, tokenization and validation.

Everything here is a value type: tokens, regions and violations are created
fresh per analysis call, and rules are frozen so a built index can be shared
between concurrent callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RuleCatalogError(ValueError):
    """Raised when rule catalog data is malformed at construction time."""


class InvalidRuleError(RuleCatalogError):
    """A single `NestingRule` failed validation."""


class TokenKind(str, Enum):
    """Classification of a lexed tag occurrence."""

    OPEN = "open"
    CLOSE = "close"
    SELF_CLOSING = "self-closing"


class Dialect(str, Enum):
    """
    Source-file flavor determining how markup regions are located.

    - PLAIN: the whole document is markup (`.html`)
    - COMPONENT: markup lives in `return ( ... )` blocks (JSX/TSX)
    - TEMPLATE_WRAPPED: markup lives in a `<template>` block (Vue/Svelte)
    - UNKNOWN: anything else; scanned like PLAIN
    """

    PLAIN = "plain"
    COMPONENT = "component"
    TEMPLATE_WRAPPED = "template-wrapped"
    UNKNOWN = "unknown"

    @classmethod
    def coerce(cls, value: Dialect | str | None) -> Dialect:
        """Map a member or raw string onto a dialect, defaulting to UNKNOWN."""
        if isinstance(value, Dialect):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class Reference:
    """A labelled documentation link attached to a rule."""

    label: str
    url: str


@dataclass(frozen=True, slots=True)
class NestingRule:
    """
    `child` must not be the immediate markup child of `parent`.

    Rules are immutable. Validation happens eagerly so malformed catalog data
    fails at import time instead of silently never matching.
    """

    parent: str
    child: str
    reason: str
    alternatives: tuple[str, ...] = ()
    references: tuple[Reference, ...] = ()

    def __post_init__(self) -> None:
        for role in ("parent", "child"):
            name = getattr(self, role)
            if not name or not isinstance(name, str):
                raise InvalidRuleError(f"Rule {role} must be a non-empty tag name")
            if name != name.lower():
                raise InvalidRuleError(
                    f"Rule {role} '{name}' must be a lowercase tag name"
                )
        if not self.reason:
            raise InvalidRuleError(
                f"Rule {self.parent} > {self.child} is missing a reason"
            )
        for ref in self.references:
            if not ref.url:
                raise InvalidRuleError(
                    f"Rule {self.parent} > {self.child} has a reference without a URL"
                )

    @property
    def key(self) -> tuple[str, str]:
        return (self.parent, self.child)


@dataclass(frozen=True, slots=True)
class MarkupRegion:
    """A slice of the original document plus its offset into that document."""

    text: str
    base_offset: int = 0

    def to_absolute(self, offset: int) -> int:
        return self.base_offset + offset


@dataclass(frozen=True, slots=True)
class TagToken:
    """One tag occurrence, in region-local coordinates."""

    kind: TokenKind
    name: str
    offset: int
    length: int


@dataclass(frozen=True, slots=True)
class ParentFrame:
    """A currently-open ancestor element on the checker stack."""

    name: str
    offset: int


@dataclass(frozen=True, slots=True)
class NestingViolation:
    """
    An invalid parent > child adjacency.

    `offset` is local to the region the tag was found in; `absolute_offset`
    is filled in once the violation is translated back into document
    coordinates (it equals `offset` until then).
    """

    parent: str
    child: str
    offset: int
    length: int
    rule: NestingRule
    absolute_offset: int | None = None

    def __post_init__(self) -> None:
        if self.absolute_offset is None:
            object.__setattr__(self, "absolute_offset", self.offset)

    @property
    def end_offset(self) -> int:
        return self.absolute_offset + self.length

    @property
    def code(self) -> str:
        return f"{self.parent}-no-{self.child}"

    def translated(self, region: MarkupRegion) -> NestingViolation:
        """Return a copy positioned in the coordinates of the full document."""
        return NestingViolation(
            parent=self.parent,
            child=self.child,
            offset=self.offset,
            length=self.length,
            rule=self.rule,
            absolute_offset=region.to_absolute(self.offset),
        )

    def __str__(self) -> str:
        return f"<{self.child}> inside <{self.parent}> (offset {self.absolute_offset})"
