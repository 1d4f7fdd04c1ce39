"""
Systematically generated nesting rules.

Most content-model restrictions are of the form "parent X only permits
these direct children". Rather than enumerating every forbidden child by
hand, each restriction is declared once as data (`PERMITTED_CHILDREN`,
`PHRASING_ONLY_PARENTS`, `INTERACTIVE_RESTRICTIONS`) and expanded against
the element catalog.
"""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass

from ..types import NestingRule
from ..types import Reference
from .elements import ALL_HTML_TAGS
from .elements import PHRASING_CONTENT_TAGS
from .elements import is_html_tag

DEFAULT_REFERENCES: tuple[Reference, ...] = (
    Reference(label="HTML Living Standard", url="https://html.spec.whatwg.org/"),
    Reference(
        label="MDN: HTML element reference",
        url="https://developer.mozilla.org/en-US/docs/Web/HTML/Element",
    ),
)


@dataclass(frozen=True)
class PermittedChildren:
    """`parents` only accept `allowed` as direct children."""

    parents: tuple[str, ...]
    allowed: frozenset[str]
    reason: str  # `{parent}` is substituted
    alternatives: tuple[str, ...]


@dataclass(frozen=True)
class ForbiddenChildren:
    """`parent` rejects each of `children` outright."""

    parent: str
    children: tuple[str, ...]
    reason: str
    alternatives: tuple[str, ...]


PERMITTED_CHILDREN: tuple[PermittedChildren, ...] = (
    PermittedChildren(
        parents=("html",),
        allowed=frozenset({"head", "body"}),
        reason="<html> can only contain <head> and <body> as direct children.",
        alternatives=("Move this element inside <head> or <body> as appropriate.",),
    ),
    PermittedChildren(
        parents=("head",),
        allowed=frozenset(
            {"base", "link", "meta", "noscript", "script", "style", "template", "title"}
        ),
        reason="<head> can only contain document metadata and resources.",
        alternatives=("Move visible content inside <body>.",),
    ),
    PermittedChildren(
        parents=("table",),
        allowed=frozenset(
            {"caption", "colgroup", "thead", "tbody", "tfoot", "tr", "script", "template"}
        ),
        reason="<table> has a restricted set of direct children.",
        alternatives=("Use <thead>, <tbody>, <tfoot> and <tr> rows to structure the table.",),
    ),
    PermittedChildren(
        parents=("colgroup",),
        allowed=frozenset({"col", "template"}),
        reason="<colgroup> only accepts <col> (and optionally <template>).",
        alternatives=("Replace this child with <col> elements.",),
    ),
    PermittedChildren(
        parents=("thead", "tbody", "tfoot"),
        allowed=frozenset({"tr", "script", "template"}),
        reason="<{parent}> only accepts <tr> rows as direct children.",
        alternatives=("Move this element into a <td>/<th> cell inside a <tr>.",),
    ),
    PermittedChildren(
        parents=("tr",),
        allowed=frozenset({"td", "th", "script", "template"}),
        reason="<tr> can only contain <td> cells or <th> headers.",
        alternatives=("Wrap the content in a <td> or <th>.",),
    ),
    PermittedChildren(
        parents=("ul", "ol", "menu"),
        allowed=frozenset({"li", "script", "template"}),
        reason="<{parent}> can only contain <li> as direct children.",
        alternatives=("Wrap the content in an <li>.",),
    ),
    PermittedChildren(
        parents=("dl",),
        allowed=frozenset({"dt", "dd", "script", "template"}),
        reason="<dl> can only contain <dt>/<dd> pairs as direct children.",
        alternatives=("Use <dt> for terms and <dd> for descriptions.",),
    ),
    PermittedChildren(
        parents=("select",),
        allowed=frozenset({"option", "optgroup", "hr", "script", "template"}),
        reason="<select> only accepts <option> and <optgroup> as its content.",
        alternatives=("Replace this element with an <option> or <optgroup>.",),
    ),
    PermittedChildren(
        parents=("optgroup",),
        allowed=frozenset({"option", "script", "template"}),
        reason="<optgroup> can only contain <option> elements.",
        alternatives=("Move this node out of the <optgroup> or turn it into an <option>.",),
    ),
    PermittedChildren(
        parents=("picture",),
        allowed=frozenset({"source", "img", "script", "template"}),
        reason="<picture> can only contain <source> elements and one fallback <img>.",
        alternatives=("Use <source> for variants and <img> as the fallback.",),
    ),
)

PHRASING_ONLY_PARENTS: tuple[str, ...] = (
    "p",
    "summary",
    "dt",
    "legend",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
)

_INTERACTIVE = ("a", "button", "input", "select", "textarea", "label", "details")

INTERACTIVE_RESTRICTIONS: tuple[ForbiddenChildren, ...] = (
    ForbiddenChildren(
        parent="a",
        children=_INTERACTIVE,
        reason="<a> must not contain nested interactive elements.",
        alternatives=("Use a single interactive element per UI control.",),
    ),
    ForbiddenChildren(
        parent="button",
        children=(*_INTERACTIVE, "form"),
        reason="<button> must not contain nested interactive elements.",
        alternatives=("Use separate controls or restructure the interaction.",),
    ),
    ForbiddenChildren(
        parent="form",
        children=("form",),
        reason="A <form> cannot be nested inside another <form>.",
        alternatives=("Use a single form and group sections with <fieldset>.",),
    ),
    ForbiddenChildren(
        parent="label",
        children=("label",),
        reason="A <label> cannot be nested inside another <label>.",
        alternatives=("Use a separate label for each form control.",),
    ),
)


def rules_for_permitted_children(
    parent: str,
    allowed: Iterable[str],
    reason: str,
    alternatives: Iterable[str],
    references: tuple[Reference, ...] = DEFAULT_REFERENCES,
) -> Iterator[NestingRule]:
    """Yield a rule for every catalog tag not in `allowed`, in catalog order."""
    allowed = frozenset(allowed)
    alternatives = tuple(alternatives)
    for child in ALL_HTML_TAGS:
        if child in allowed:
            continue
        yield NestingRule(
            parent=parent,
            child=child,
            reason=reason,
            alternatives=alternatives,
            references=references,
        )


def _iter_generated() -> Iterator[NestingRule]:
    for spec in PERMITTED_CHILDREN:
        for parent in spec.parents:
            yield from rules_for_permitted_children(
                parent,
                spec.allowed,
                spec.reason.replace("{parent}", parent),
                spec.alternatives,
            )

    for parent in PHRASING_ONLY_PARENTS:
        yield from rules_for_permitted_children(
            parent,
            PHRASING_CONTENT_TAGS,
            f"<{parent}> can only contain phrasing content (inline content).",
            ("Move block elements out of the container or use a block-level wrapper.",),
        )

    for spec in INTERACTIVE_RESTRICTIONS:
        for child in spec.children:
            yield NestingRule(
                parent=spec.parent,
                child=child,
                reason=spec.reason,
                alternatives=spec.alternatives,
                references=DEFAULT_REFERENCES,
            )


def generate_rules() -> list[NestingRule]:
    """
    Expand the declarative restrictions into concrete rules.

    Only pairs where both tags belong to the element catalog are kept, and
    the first rule generated for a given pair wins.
    """
    seen: set[tuple[str, str]] = set()
    rules: list[NestingRule] = []
    for rule in _iter_generated():
        if not (is_html_tag(rule.parent) and is_html_tag(rule.child)):
            continue
        if rule.key in seen:
            continue
        seen.add(rule.key)
        rules.append(rule)
    return rules
