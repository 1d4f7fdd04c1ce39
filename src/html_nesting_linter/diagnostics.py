"""
Editor-facing diagnostics.

Converts `NestingViolation`s into LSP-shaped diagnostic records. Rule text is
used verbatim: the reason goes into the message, alternatives and references
become related information, and the first reference is the "more info" link.
"""

from __future__ import annotations

import bisect
from abc import ABC
from abc import abstractmethod
from enum import Enum
from typing import Generic
from typing import TypeVar

from pydantic import BaseModel
from pydantic import TypeAdapter

from .types import NestingRule
from .types import NestingViolation

DIAGNOSTIC_SOURCE = "HTML Nesting Validator"
FALLBACK_REFERENCE_URL = "https://developer.mozilla.org/en-US/docs/Web/HTML"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Position(BaseModel):
    """Zero-based line and character."""

    line: int
    character: int


class Range(BaseModel):
    start: Position
    end: Position


class RelatedInformation(BaseModel):
    message: str
    range: Range | None = None


class Diagnostic(BaseModel):
    range: Range
    severity: Severity
    message: str
    source: str = DIAGNOSTIC_SOURCE
    code: str
    code_url: str
    offset: int
    length: int
    related: list[RelatedInformation] = []


class FileReport(BaseModel):
    """Diagnostics for one linted file, as written by `--format json`."""

    path: str
    language: str | None = None
    diagnostics: list[Diagnostic] = []


class LineIndex:
    """
    Offset to line/character conversion for one document.

    Offsets are Python string indices. Characters are UTF-16 code units, as
    LSP positions count them, so an astral character (e.g. an emoji) takes
    two columns.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.length = len(text)
        self.line_starts = [0]
        for i, char in enumerate(text):
            if char == "\n":
                self.line_starts.append(i + 1)

    def position(self, offset: int) -> Position:
        offset = max(0, min(offset, self.length))
        line = bisect.bisect_right(self.line_starts, offset) - 1
        segment = self.text[self.line_starts[line] : offset]
        if segment.isascii():
            return Position(line=line, character=len(segment))
        return Position(line=line, character=len(segment.encode("utf-16-le")) // 2)

    def range(self, start: int, end: int) -> Range:
        return Range(start=self.position(start), end=self.position(end))


def build_message(parent: str, child: str, reason: str) -> str:
    return f"<{child}> cannot be placed inside <{parent}>. {reason}"


def more_info_url(rule: NestingRule) -> str:
    if rule.references:
        return rule.references[0].url
    return FALLBACK_REFERENCE_URL


def build_related_information(
    rule: NestingRule,
    location: Range | None = None,
) -> list[RelatedInformation]:
    info: list[RelatedInformation] = []
    if rule.alternatives:
        info.append(
            RelatedInformation(
                message="Alternatives: " + " | ".join(rule.alternatives),
                range=location,
            )
        )
    for ref in rule.references:
        info.append(RelatedInformation(message=f"{ref.label}: {ref.url}", range=location))
    return info


def to_diagnostic(
    violation: NestingViolation,
    lines: LineIndex,
    severity: Severity = Severity.ERROR,
) -> Diagnostic:
    start = violation.absolute_offset
    rng = lines.range(start, start + violation.length)
    return Diagnostic(
        range=rng,
        severity=severity,
        message=build_message(violation.parent, violation.child, violation.rule.reason),
        code=violation.code,
        code_url=more_info_url(violation.rule),
        offset=start,
        length=violation.length,
        related=build_related_information(violation.rule, rng),
    )


def to_diagnostics(
    text: str,
    violations: list[NestingViolation],
    severity: Severity = Severity.ERROR,
) -> list[Diagnostic]:
    lines = LineIndex(text)
    return [to_diagnostic(v, lines, severity) for v in violations]


T = TypeVar("T", bound=BaseModel)


class Serializer(ABC, Generic[T]):
    @abstractmethod
    def encode(self, messages: list[T]) -> bytes: ...

    @abstractmethod
    def decode(self, data: bytes, model_type: type[T]) -> list[T]: ...


class JsonSerializer(Serializer[T]):
    def encode(self, messages: list[T]) -> bytes:
        return b"[" + b",".join(
            m.model_dump_json(exclude_none=True).encode() for m in messages
        ) + b"]"

    def decode(self, data: bytes, model_type: type[T]) -> list[T]:
        return TypeAdapter(list[model_type]).validate_json(data)
