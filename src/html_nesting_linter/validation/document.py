"""
Document-level analysis.

Ties region extraction, tokenization and nesting validation together and
translates every violation back into the coordinates of the full document.
"""

from __future__ import annotations

import logging

from ..catalog.index import RuleIndex
from ..catalog.index import default_rule_index
from ..languages import dialect_for_language
from ..markup_syntax.regions import extract_markup_regions
from ..markup_syntax.tokenization import RegexTagTokenizer
from ..markup_syntax.tokenization import Tokenizer
from ..types import Dialect
from ..types import NestingViolation
from .nesting import find_nesting_violations

logger = logging.getLogger(__name__)


def default_tokenizer(dialect: Dialect) -> Tokenizer:
    # Capitalized names are components in JSX and SFC templates.
    preserve = dialect in (Dialect.COMPONENT, Dialect.TEMPLATE_WRAPPED)
    return RegexTagTokenizer(preserve_component_case=preserve)


def analyze(
    text: str,
    dialect: Dialect | str | None = Dialect.PLAIN,
    *,
    index: RuleIndex | None = None,
    tokenizer: Tokenizer | None = None,
    check_self_closing: bool | None = None,
) -> list[NestingViolation]:
    """
    Find invalid parent > child nesting in `text`.

    Never raises for malformed markup; the result is an ordered (possibly
    empty) list with `absolute_offset` set on every violation.

    Args:
        text: Full document text
        dialect: How markup regions are located (unknown values scan the
            whole document)
        index: Rule index to consult; the bundled rules by default
        tokenizer: Tag tokenizer; `RegexTagTokenizer` by default
        check_self_closing: Check explicitly self-closed non-void tags
            (`<div />`) as children. `None` enables it for the component
            dialect only

    Returns:
        Violations ordered by region, then by position within the region
    """
    dialect = Dialect.coerce(dialect)
    index = index if index is not None else default_rule_index()
    tokenizer = tokenizer if tokenizer is not None else default_tokenizer(dialect)
    if check_self_closing is None:
        # In JSX `<div />` is a complete element.
        check_self_closing = dialect is Dialect.COMPONENT

    out: list[NestingViolation] = []
    seen: set[tuple[int, str, str]] = set()
    for region in extract_markup_regions(text, dialect):
        tokens = tokenizer.tokenize(region.text)
        violations = find_nesting_violations(
            tokens,
            index,
            check_self_closing=check_self_closing,
        )
        for violation in violations:
            translated = violation.translated(region)
            # Nested `return (` regions overlap their enclosing region.
            key = (translated.absolute_offset, translated.parent, translated.child)
            if key in seen:
                continue
            seen.add(key)
            out.append(translated)

    logger.debug("Found %d nesting violation(s)", len(out))
    return out


def analyze_for_language(
    text: str,
    language_id: str | None,
    *,
    index: RuleIndex | None = None,
    tokenizer: Tokenizer | None = None,
    check_self_closing: bool | None = None,
) -> list[NestingViolation]:
    """`analyze()` with the dialect chosen from an editor language id."""
    return analyze(
        text,
        dialect_for_language(language_id),
        index=index,
        tokenizer=tokenizer,
        check_self_closing=check_self_closing,
    )
