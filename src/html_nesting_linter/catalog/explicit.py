"""
Hand-curated nesting rules.

These cover the violations people actually hit (block content in `<p>`,
nested interactive controls, broken table and list structure). Each carries
a specific explanation and concrete alternatives, so when a generated rule
covers the same (parent, child) pair the rule defined here wins.
"""

from __future__ import annotations

from ..types import NestingRule
from ..types import Reference
from .elements import HEADING_TAGS

MDN_ELEMENT_URL = "https://developer.mozilla.org/en-US/docs/Web/HTML/Element"


def mdn(tag: str, label: str | None = None) -> Reference:
    return Reference(
        label=label or f"MDN: <{tag}>",
        url=f"{MDN_ELEMENT_URL}/{tag}",
    )


PHRASING_CONTENT_SPEC = Reference(
    label="HTML Spec: phrasing content",
    url="https://html.spec.whatwg.org/multipage/dom.html#phrasing-content",
)
HEADINGS_MDN = Reference(
    label="MDN: Headings",
    url=f"{MDN_ELEMENT_URL}/Heading_Elements",
)


def _rule(
    parent: str,
    child: str,
    reason: str,
    alternatives: list[str],
    references: list[Reference] | None = None,
) -> NestingRule:
    return NestingRule(
        parent=parent,
        child=child,
        reason=reason,
        alternatives=tuple(alternatives),
        references=tuple(references if references is not None else [mdn(parent)]),
    )


def _paragraph_rules() -> list[NestingRule]:
    rules = [
        _rule(
            "p",
            "div",
            "<p> can only contain phrasing content (text and inline elements). "
            "<div> is a block element and implicitly closes the <p>.",
            [
                "Use a <div> instead of the <p> if you need to contain blocks.",
                "Move the <div> outside the <p>.",
                "If you want a wrapper around paragraphs, use <section> or <article>.",
            ],
            [mdn("p"), PHRASING_CONTENT_SPEC],
        ),
        _rule(
            "p",
            "h1",
            "Headings cannot be placed inside a <p>.",
            [
                "Close the <p> before the heading.",
                "Put paragraphs before and after the heading instead.",
            ],
        ),
    ]
    for heading in HEADING_TAGS[1:]:
        rules.append(
            _rule(
                "p",
                heading,
                "Headings cannot be placed inside a <p>.",
                ["Close the <p> before the heading."],
            )
        )

    rules.extend(
        [
            _rule(
                "p",
                "ul",
                "<ul> is a block element and cannot be placed inside a <p>.",
                ["Close the <p> before the list.", "Use a <div> wrapper instead of <p>."],
            ),
            _rule(
                "p",
                "ol",
                "<ol> is a block element and cannot be placed inside a <p>.",
                ["Close the <p> before the list.", "Use a <div> wrapper instead."],
            ),
            _rule(
                "p",
                "table",
                "<table> is a block element and cannot be placed inside a <p>.",
                [
                    "Place the table outside the <p>.",
                    "Use a <div> or <section> as the container.",
                ],
            ),
            _rule(
                "p",
                "form",
                "<form> cannot be nested inside a <p>.",
                ["Place the <form> outside the <p>."],
            ),
            _rule(
                "p",
                "figure",
                "<figure> is a block element and cannot be placed inside a <p>.",
                ["Place the <figure> outside the <p>."],
                [mdn("figure")],
            ),
        ]
    )

    for child, alternative in (
        ("blockquote", "Place the <blockquote> outside the <p>."),
        ("pre", "Place the <pre> outside the <p>."),
        ("section", "Use a <div> instead of the <p>, or restructure the content."),
        ("article", "Use a <div> as the container instead of <p>."),
        ("aside", "Use a <div> as the container."),
        ("footer", "Place the <footer> outside the <p>."),
        ("header", "Place the <header> outside the <p>."),
        ("nav", "Place the <nav> outside the <p>."),
        ("main", "Place the <main> outside the <p>."),
    ):
        rules.append(
            _rule(
                "p",
                child,
                f"<{child}> is a block element and cannot be placed inside a <p>.",
                [alternative],
            )
        )
    return rules


def _interactive_rules() -> list[NestingRule]:
    form_control_reason = "Interactive form controls must not be placed inside <{parent}>."
    return [
        _rule(
            "a",
            "a",
            "An <a> cannot be nested inside another <a>. "
            "This is invalid according to the HTML specification.",
            [
                "Use CSS to make a container look like a link.",
                "Use a click handler on a <div> or <span>.",
                "Restructure the content into separate links.",
            ],
            [
                mdn("a"),
                Reference(
                    label="HTML Spec: the a element",
                    url="https://html.spec.whatwg.org/multipage/text-level-semantics.html#the-a-element",
                ),
            ],
        ),
        _rule(
            "a",
            "button",
            "A <button> is interactive and cannot be inside an <a> "
            "(both receive focus).",
            [
                "Use either <a> or <button>, not both.",
                "If you need a link styled as a button, use <a class='btn'>.",
                "If you need an action plus navigation, handle it in JavaScript.",
            ],
            [
                mdn("a"),
                Reference(
                    label="WCAG: Keyboard accessible",
                    url="https://www.w3.org/WAI/WCAG21/Understanding/keyboard.html",
                ),
            ],
        ),
        _rule(
            "a",
            "input",
            form_control_reason.format(parent="a"),
            ["Move the form outside the link.", "Use JavaScript for the input's action."],
        ),
        _rule(
            "a",
            "select",
            form_control_reason.format(parent="a"),
            ["Move the select outside the link."],
        ),
        _rule(
            "a",
            "textarea",
            form_control_reason.format(parent="a"),
            ["Move the textarea outside the link."],
        ),
        _rule(
            "button",
            "a",
            "A link <a> cannot be inside a <button>. "
            "It creates accessibility and behaviour conflicts.",
            [
                "Use only an <a> styled with CSS to look like a button.",
                "Use only a <button> and navigate with JavaScript.",
                "Use <a role='button'> for button semantics on a link.",
            ],
            [
                mdn("button"),
                Reference(
                    label="WCAG: Buttons and links",
                    url="https://www.w3.org/WAI/WCAG21/Techniques/html/H91",
                ),
            ],
        ),
        _rule(
            "button",
            "button",
            "A <button> cannot be nested inside another <button>.",
            ["Use separate buttons.", "Use CSS to group buttons visually."],
        ),
        _rule(
            "button",
            "input",
            form_control_reason.format(parent="button"),
            ["Move the input outside the button."],
        ),
        _rule(
            "label",
            "label",
            "A <label> cannot be nested inside another <label>.",
            ["Use a separate label for each form control."],
        ),
        _rule(
            "form",
            "form",
            "A <form> cannot be nested inside another <form>.",
            [
                "Use a single form and group sections with <fieldset>.",
                "Use JavaScript to handle several sets of data.",
                "Use a <dialog> for secondary forms.",
            ],
            [
                mdn("form"),
                Reference(
                    label="HTML Spec: form",
                    url="https://html.spec.whatwg.org/multipage/forms.html#the-form-element",
                ),
            ],
        ),
    ]


def _table_rules() -> list[NestingRule]:
    rules = [
        _rule(
            "table",
            "div",
            "<div> cannot be a direct child of <table>. Valid children are "
            "<thead>, <tbody>, <tfoot>, <tr>, <caption> and <colgroup>.",
            [
                "Use <td> or <th> for the content.",
                "Put the <div> inside a <td> cell.",
                "Consider CSS Grid or Flexbox if you don't need table semantics.",
            ],
            [
                mdn("table"),
                Reference(
                    label="HTML Spec: table",
                    url="https://html.spec.whatwg.org/multipage/tables.html#the-table-element",
                ),
            ],
        ),
        _rule(
            "table",
            "p",
            "<p> cannot be a direct child of <table>.",
            [
                "Put the <p> inside a <td> cell.",
                "Use <caption> for descriptive text about the table.",
            ],
        ),
        _rule(
            "tr",
            "div",
            "<div> cannot be a direct child of <tr>. Only <td> and <th> are allowed.",
            [
                "Put the <div> inside a <td>.",
                "Use CSS to achieve the layout inside the cell.",
            ],
        ),
        _rule(
            "tr",
            "p",
            "<p> cannot be a direct child of <tr>. Only <td> and <th> are allowed.",
            ["Put the <p> inside a <td>."],
        ),
        _rule(
            "tr",
            "span",
            "<span> cannot be a direct child of <tr>.",
            ["Put the <span> inside a <td>."],
        ),
        _rule(
            "tr",
            "a",
            "<a> cannot be a direct child of <tr>.",
            ["Put the link inside a <td>."],
        ),
        _rule(
            "caption",
            "table",
            "A table cannot be nested inside <caption>.",
            ["Use plain text or a <p> inside <caption>."],
        ),
    ]
    return rules


def _list_rules() -> list[NestingRule]:
    rules = [
        _rule(
            "ul",
            "div",
            "<ul> can only contain <li> elements as direct children.",
            [
                "Wrap the <div> in an <li>.",
                "Use CSS Flexbox/Grid instead of <ul> if you don't need list semantics.",
            ],
        ),
    ]
    for parent, child in (("ul", "p"), ("ul", "span"), ("ul", "a"), ("ol", "div"), ("ol", "p")):
        rules.append(
            _rule(
                parent,
                child,
                f"<{parent}> can only contain <li> elements as direct children.",
                [f"Wrap the <{child}> in an <li>."],
            )
        )
    return rules


def _misc_rules() -> list[NestingRule]:
    return [
        _rule(
            "head",
            "div",
            "<head> cannot contain visible elements such as <div>.",
            [
                "Move the <div> inside <body>.",
                "Only use <meta>, <link>, <script> or <style> inside <head>.",
            ],
        ),
        _rule(
            "head",
            "p",
            "<head> cannot contain visible elements such as <p>.",
            ["Move the content inside <body>."],
        ),
        _rule(
            "h1",
            "h1",
            "Headings of the same level cannot be nested.",
            ["Use a heading hierarchy (h1 > h2 > h3...)."],
            [HEADINGS_MDN],
        ),
        _rule(
            "h1",
            "h2",
            "Headings cannot be nested inside other headings.",
            ["Use headings as separate elements, not nested ones."],
            [HEADINGS_MDN],
        ),
        _rule(
            "h2",
            "h1",
            "Headings cannot be nested.",
            ["Use headings as separate elements."],
            [HEADINGS_MDN],
        ),
        _rule(
            "select",
            "div",
            "<select> can only contain <option> and <optgroup>.",
            [
                "Use <option> for the choices.",
                "If you need more visual control, consider a custom UI component.",
            ],
        ),
        _rule(
            "select",
            "span",
            "<select> can only contain <option> and <optgroup>.",
            ["Use <option> inside <select>."],
        ),
        _rule(
            "figcaption",
            "figcaption",
            "A <figcaption> cannot be nested inside another <figcaption>.",
            ["Use a single <figcaption> per <figure>."],
        ),
        _rule(
            "summary",
            "div",
            "<summary> can only contain phrasing content. <div> is a block element.",
            ["Use a <span> or plain text directly inside <summary>."],
        ),
        _rule(
            "dt",
            "div",
            "<dt> can only contain phrasing content.",
            ["Use only text or inline elements inside <dt>."],
        ),
    ]


def build_explicit_rules() -> list[NestingRule]:
    return [
        *_paragraph_rules(),
        *_interactive_rules(),
        *_table_rules(),
        *_list_rules(),
        *_misc_rules(),
    ]


EXPLICIT_RULES: tuple[NestingRule, ...] = tuple(build_explicit_rules())
