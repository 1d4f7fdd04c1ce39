"""
Tag tokenization.

Turns a markup region into open/close/self-closing tag tokens. This is a
regex scan, not an HTML tokenizer: attribute values containing `>` end the
tag early and unterminated tags are dropped. The checker only depends on the
`Tokenizer` protocol, so a stricter implementation can be swapped in.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Protocol

from ..catalog.elements import RAW_TEXT_ELEMENTS
from ..catalog.elements import VOID_ELEMENTS
from ..types import TagToken
from ..types import TokenKind

TAG_RE = re.compile(r"<(/)?([A-Za-z][A-Za-z0-9-]*)[^>]*>")


class Tokenizer(Protocol):
    def tokenize(self, text: str) -> list[TagToken]: ...


class RegexTagTokenizer:
    """
    Default tokenizer.

    Notes:
    - Names are lowercased, except that with `preserve_component_case` a
      name starting with an uppercase letter (`<Button>`, `<Link>`) keeps
      its spelling so it never matches an HTML element rule.
    - Void elements are always self-closing, as is anything ending in `/>`.
    - The body of a raw-text element (script/style/template) produces no
      tokens. Skipping is not re-entrant: the first matching close tag ends
      it. A raw-text tag written as `<script />` has no body and is emitted
      as a self-closing token.
    """

    def __init__(
        self,
        *,
        preserve_component_case: bool = False,
        raw_text_elements: frozenset[str] = RAW_TEXT_ELEMENTS,
        void_elements: frozenset[str] = VOID_ELEMENTS,
    ) -> None:
        self.preserve_component_case = preserve_component_case
        self.raw_text_elements = raw_text_elements
        self.void_elements = void_elements

    def tokenize(self, text: str) -> list[TagToken]:
        return list(self.iter_tokens(text))

    def normalize_name(self, raw: str) -> str:
        if self.preserve_component_case and raw[0].isupper():
            return raw
        return raw.lower()

    def iter_tokens(self, text: str) -> Iterator[TagToken]:
        skip_until: str | None = None

        for match in TAG_RE.finditer(text):
            full = match.group(0)
            name = self.normalize_name(match.group(2))
            is_close = match.group(1) is not None
            explicit_self_close = full.endswith("/>")

            if skip_until is not None:
                if is_close and name == skip_until:
                    skip_until = None
                continue

            if is_close:
                kind = TokenKind.CLOSE
            elif explicit_self_close or name in self.void_elements:
                kind = TokenKind.SELF_CLOSING
            else:
                if name in self.raw_text_elements:
                    skip_until = name
                    continue
                kind = TokenKind.OPEN

            yield TagToken(
                kind=kind,
                name=name,
                offset=match.start(),
                length=len(full),
            )


def tokenize_tags(text: str, *, preserve_component_case: bool = False) -> list[TagToken]:
    """Tokenize `text` with the default `RegexTagTokenizer`."""
    return RegexTagTokenizer(preserve_component_case=preserve_component_case).tokenize(
        text
    )
