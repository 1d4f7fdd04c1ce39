"""
Stack-based nesting validation.

Replays a tag token stream against a stack of open ancestors and reports
every open tag whose immediate parent forbids it. Only the immediate parent
is consulted; a valid wrapper in between hides deeper violations.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..catalog.elements import is_void
from ..catalog.index import RuleIndex
from ..catalog.index import default_rule_index
from ..types import NestingViolation
from ..types import ParentFrame
from ..types import TagToken
from ..types import TokenKind


class NestingChecker:
    """
    Single-use state machine over one region's tokens.

    Transitions:
    - open: check (top, name) against the index, then push
    - close: pop up to and including the nearest frame with the same name;
      ignored when no frame matches
    - self-closing: no stack change and, by default, no check. With
      `check_self_closing`, an explicitly self-closed non-void element
      (`<div/>`) is checked as a child; void elements never are.

    Whatever is still open at the end is discarded without diagnostics.
    """

    def __init__(
        self,
        index: RuleIndex | None = None,
        *,
        check_self_closing: bool = False,
    ) -> None:
        self.index = index if index is not None else default_rule_index()
        self.check_self_closing = check_self_closing
        self.stack: list[ParentFrame] = []
        self.violations: list[NestingViolation] = []

    @property
    def parent(self) -> ParentFrame | None:
        return self.stack[-1] if self.stack else None

    def feed(self, token: TagToken) -> None:
        if token.kind is TokenKind.OPEN:
            self._check_child(token)
            self.stack.append(ParentFrame(name=token.name, offset=token.offset))
        elif token.kind is TokenKind.CLOSE:
            self._close(token.name)
        elif self.check_self_closing and not is_void(token.name):
            self._check_child(token)

    def _check_child(self, token: TagToken) -> None:
        parent = self.parent
        if parent is None:
            return
        rule = self.index.lookup(parent.name, token.name)
        if rule is None:
            return
        self.violations.append(
            NestingViolation(
                parent=parent.name,
                child=token.name,
                offset=token.offset,
                length=token.length,
                rule=rule,
            )
        )

    def _close(self, name: str) -> None:
        for i in range(len(self.stack) - 1, -1, -1):
            if self.stack[i].name == name:
                # Anything opened after the match was implicitly closed.
                del self.stack[i:]
                return


def find_nesting_violations(
    tokens: Iterable[TagToken],
    index: RuleIndex | None = None,
    *,
    check_self_closing: bool = False,
) -> list[NestingViolation]:
    """Return violations in token order, with region-local offsets."""
    checker = NestingChecker(index, check_self_closing=check_self_closing)
    for token in tokens:
        checker.feed(token)
    return checker.violations
