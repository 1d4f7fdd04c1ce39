"""
Markup region extraction.

Locates the parts of a source file that should be scanned as markup. This is
lexical and approximate on purpose: component files are searched for
`return (` blocks with a paren-depth counter, not parsed as JavaScript.
"""

from __future__ import annotations

import logging
import re

from ..types import Dialect
from ..types import MarkupRegion

logger = logging.getLogger(__name__)

RETURN_BLOCK_RE = re.compile(r"\breturn\s*\(\s*")
TEMPLATE_BLOCK_RE = re.compile(
    r"<template(?:\s[^>]*)?>(.*?)</template\s*>",
    re.IGNORECASE | re.DOTALL,
)


def extract_markup_regions(
    text: str,
    dialect: Dialect | str | None,
) -> list[MarkupRegion]:
    """
    Return the regions of `text` to scan, in document order.

    Every dialect falls back to a single whole-document region when its
    specific region cannot be found.
    """
    dialect = Dialect.coerce(dialect)
    if dialect is Dialect.COMPONENT:
        regions = extract_return_blocks(text)
    elif dialect is Dialect.TEMPLATE_WRAPPED:
        regions = extract_template_block(text)
    else:
        regions = [whole_document(text)]
    logger.debug("Extracted %d region(s) for dialect %s", len(regions), dialect.value)
    return regions


def whole_document(text: str) -> MarkupRegion:
    return MarkupRegion(text=text, base_offset=0)


def find_closing_paren(text: str, start: int) -> int:
    """
    Return the index of the `)` that closes an already-open `(`.

    Scanning starts at `start` with depth 1. Parens inside strings, comments
    or regex literals are counted like any other. When the paren is never
    closed the end of the text is returned.
    """
    depth = 1
    for i in range(start, len(text)):
        char = text[i]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return i
    return len(text)


def extract_return_blocks(text: str) -> list[MarkupRegion]:
    """
    Regions for JSX-style `return ( <markup> )` blocks.

    Each region runs from the first `<` after `return (` up to (not
    including) the matching `)`. Nested returns (e.g. inside a `.map()`
    callback) yield their own, overlapping regions.
    """
    regions: list[MarkupRegion] = []
    found_markup = False
    for match in RETURN_BLOCK_RE.finditer(text):
        start = match.end()
        lt = text.find("<", start)
        if lt == -1:
            continue
        found_markup = True
        end = find_closing_paren(text, start)
        if lt >= end:
            # `return (value)` with markup only appearing after the paren.
            continue
        regions.append(MarkupRegion(text=text[lt:end], base_offset=lt))

    if not found_markup:
        return [whole_document(text)]
    return regions


def extract_template_block(text: str) -> list[MarkupRegion]:
    """Region for the first `<template>` block of a single-file component."""
    match = TEMPLATE_BLOCK_RE.search(text)
    if match is None:
        return [whole_document(text)]
    return [MarkupRegion(text=match.group(1), base_offset=match.start(1))]
