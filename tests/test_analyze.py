from __future__ import annotations

import pytest

from html_nesting_linter import analyze
from html_nesting_linter import analyze_for_language
from html_nesting_linter.catalog.elements import RAW_TEXT_ELEMENTS
from html_nesting_linter.catalog.elements import VOID_ELEMENTS
from html_nesting_linter.catalog.explicit import EXPLICIT_RULES
from html_nesting_linter.catalog.index import RuleIndex
from html_nesting_linter.markup_syntax.regions import extract_markup_regions
from html_nesting_linter.markup_syntax.tokenization import RegexTagTokenizer
from html_nesting_linter.types import Dialect


@pytest.mark.parametrize("dialect", list(Dialect))
@pytest.mark.parametrize(
    "text",
    [
        "",
        "just some text",
        "a < b and c > d",
        "function f() { return (1 < 2); }",
    ],
)
def test_no_tags_no_violations(text: str, dialect: Dialect) -> None:
    assert analyze(text, dialect) == []


def test_every_rule_is_detected(rule_index: RuleIndex) -> None:
    for rule in rule_index:
        text = f"<{rule.parent}><{rule.child}></{rule.child}></{rule.parent}>"
        violations = analyze(text, Dialect.PLAIN)
        if rule.child in VOID_ELEMENTS or rule.child in RAW_TEXT_ELEMENTS:
            # Void children are self-closing and raw-text children are
            # skipped by the tokenizer; neither is checked.
            assert violations == [], text
            continue
        assert len(violations) == 1, text
        [violation] = violations
        assert (violation.parent, violation.child) == (rule.parent, rule.child)
        assert violation.rule is rule
        assert violation.absolute_offset == len(rule.parent) + 2


@pytest.mark.parametrize(
    "text",
    [
        "<div><p>text</p></div>",
        "<ul><li><a href='#'>x</a></li></ul>",
        "<table><tbody><tr><td><div>cell</div></td></tr></tbody></table>",
        "<p>Some <strong>bold</strong> and <em>italic</em> text</p>",
        "<select><optgroup><option>a</option></optgroup></select>",
        "<dl><dt>term</dt><dd><p>desc</p></dd></dl>",
        "<picture><source srcset='a.webp'><img src='a.png'></picture>",
    ],
)
def test_valid_nesting(text: str) -> None:
    assert analyze(text, Dialect.PLAIN) == []


@pytest.mark.parametrize(
    "text",
    [
        "<div><span></div>",
        "</p></div><p>",
        "<div></span></div></div></div>",
        "<a><b></a></b>",
        "<p",
        "<<<>>>",
    ],
)
def test_unbalanced_markup_never_raises(text: str) -> None:
    assert isinstance(analyze(text, Dialect.PLAIN), list)


def test_self_closing_children_are_not_reported() -> None:
    assert analyze("<select><input/></select>", Dialect.PLAIN) == []
    assert analyze("<p><div/></p>", Dialect.PLAIN) == []


@pytest.mark.parametrize(
    "text",
    [
        "<p><script>&lt;div&gt;</script></p>",
        "<p><style>div{}</style></p>",
        "<p><script>document.write('<div></div>')</script></p>",
    ],
)
def test_raw_text_content_is_not_tokenized(text: str) -> None:
    assert analyze(text, Dialect.PLAIN) == []


def test_component_return_block() -> None:
    text = "function X(){ return ( <div><p><div/></p></div> ); }"
    [region] = extract_markup_regions(text, Dialect.COMPONENT)
    assert region.base_offset == text.index("<")

    [violation] = analyze(text, Dialect.COMPONENT)
    assert (violation.parent, violation.child) == ("p", "div")
    assert violation.offset == region.text.index("<div/>")
    assert violation.absolute_offset == violation.offset + region.base_offset
    assert text[violation.absolute_offset :].startswith("<div/>")
    assert violation.length == len("<div/>")


def test_component_void_children_stay_unchecked() -> None:
    text = "const C = () => { return (<select><input/></select>); };"
    assert analyze(text, Dialect.COMPONENT) == []


def test_self_closing_check_can_be_overridden() -> None:
    jsx = "function X(){ return (<p><div/></p>); }"
    assert analyze(jsx, Dialect.COMPONENT, check_self_closing=False) == []
    assert analyze_for_language(jsx, "javascriptreact", check_self_closing=False) == []

    [violation] = analyze("<p><div/></p>", Dialect.PLAIN, check_self_closing=True)
    assert (violation.parent, violation.child) == ("p", "div")
    assert analyze("<select><input/></select>", Dialect.PLAIN, check_self_closing=True) == []


def test_component_tags_are_opaque() -> None:
    text = "function X() { return (<p><Table><Div /></Table></p>); }"
    assert analyze(text, Dialect.COMPONENT) == []


def test_nested_return_blocks_report_once() -> None:
    text = (
        "function List() {\n"
        "  return (\n"
        "    <ul>{items.map((i) => { return (<li><p><div></div></p></li>); })}</ul>\n"
        "  );\n"
        "}\n"
    )
    violations = analyze(text, Dialect.COMPONENT)
    assert [(v.parent, v.child) for v in violations] == [("p", "div")]
    assert violations[0].absolute_offset == text.index("<div>")


def test_template_wrapped_dialect() -> None:
    text = (
        "<script>const x = '<p><div></div></p>'</script>\n"
        "<template><form><form></form></form></template>\n"
        "<style>p > div {}</style>\n"
    )
    [violation] = analyze(text, Dialect.TEMPLATE_WRAPPED)
    assert (violation.parent, violation.child) == ("form", "form")
    content_start = text.index("<template>") + len("<template>")
    assert violation.offset == len("<form>")
    assert violation.absolute_offset == content_start + len("<form>")
    assert violation.rule.reason == next(
        r.reason for r in EXPLICIT_RULES if r.key == ("form", "form")
    )


def test_unknown_dialect_scans_whole_text() -> None:
    violations = analyze("<a><a></a></a>", "not-a-dialect")
    assert [(v.parent, v.child) for v in violations] == [("a", "a")]


def test_analysis_is_deterministic() -> None:
    text = "<ul><div><p><h1>x</h1></p></div><span></span></ul><a><button></button></a>"
    first = analyze(text, Dialect.PLAIN)
    second = analyze(text, Dialect.PLAIN)
    assert first == second
    assert [v.code for v in first] == ["ul-no-div", "p-no-h1", "ul-no-span", "a-no-button"]


@pytest.mark.parametrize("key", [("p", "div"), ("a", "a"), ("table", "div"), ("ul", "p")])
def test_explicit_rule_content_wins(key: tuple[str, str]) -> None:
    parent, child = key
    explicit = next(r for r in EXPLICIT_RULES if r.key == key)
    [violation] = analyze(f"<{parent}><{child}></{child}></{parent}>", Dialect.PLAIN)
    assert violation.rule.reason == explicit.reason
    assert violation.rule.alternatives == explicit.alternatives
    assert violation.rule.references == explicit.references


def test_custom_tokenizer_is_used() -> None:
    class WithoutDivs(RegexTagTokenizer):
        def tokenize(self, text: str):
            return [t for t in super().tokenize(text) if t.name != "div"]

    assert analyze("<p><div></div></p>", Dialect.PLAIN, tokenizer=WithoutDivs()) == []


@pytest.mark.parametrize(
    "language_id,text,expected",
    [
        ("html", "<p><div></div></p>", [("p", "div")]),
        (
            "vue",
            "<p><div></div></p><template><a><a></a></a></template>",
            [("a", "a")],
        ),
        (
            "typescriptreact",
            "const A = () => { return (<p><div/></p>); }",
            [("p", "div")],
        ),
        ("plaintext", "const A = () => { return (<p><div/></p>); }", []),
    ],
)
def test_analyze_for_language(language_id: str, text: str, expected) -> None:
    violations = analyze_for_language(text, language_id)
    assert [(v.parent, v.child) for v in violations] == expected
