from __future__ import annotations

import io
import json

import pytest

from html_nesting_linter.cli import EXIT_OK
from html_nesting_linter.cli import EXIT_USAGE
from html_nesting_linter.cli import EXIT_VIOLATIONS
from html_nesting_linter.cli import main
from html_nesting_linter.diagnostics import FileReport
from html_nesting_linter.diagnostics import JsonSerializer


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "good.html").write_text("<ul><li>ok</li></ul>\n")
    (tmp_path / "bad.html").write_text("<div>\n  <p><div>x</div></p>\n</div>\n")
    components = tmp_path / "components"
    components.mkdir()
    (components / "Card.tsx").write_text(
        "export const Card = () => {\n  return (<a href='#'><button /></a>);\n};\n"
    )
    (components / "notes.txt").write_text("<p><div></div></p>")
    return tmp_path


def test_clean_file_exits_ok(project, capsys) -> None:
    assert main(["good.html"]) == EXIT_OK
    assert capsys.readouterr().out == ""


def test_violations_exit_nonzero(project, capsys) -> None:
    assert main(["bad.html"]) == EXIT_VIOLATIONS
    out = capsys.readouterr().out
    assert out.startswith("bad.html:2:6: error: <div> cannot be placed inside <p>.")
    assert out.rstrip().endswith("[p-no-div]")


def test_warning_severity_exits_ok(project, capsys) -> None:
    assert main(["--severity", "warning", "bad.html"]) == EXIT_OK
    assert ": warning: " in capsys.readouterr().out


def test_disable_reports_nothing(project, capsys) -> None:
    assert main(["--disable", "bad.html"]) == EXIT_OK
    assert capsys.readouterr().out == ""


def test_directory_walk_filters_suffixes(project, capsys) -> None:
    assert main(["--format", "json", "."]) == EXIT_VIOLATIONS
    payload = json.loads(capsys.readouterr().out)
    by_name = {entry["path"].rsplit("/", 1)[-1]: entry for entry in payload}
    assert set(by_name) == {"bad.html", "good.html", "Card.tsx"}
    assert by_name["Card.tsx"]["language"] == "typescriptreact"
    assert [d["code"] for d in by_name["Card.tsx"]["diagnostics"]] == ["a-no-button"]
    assert by_name["good.html"]["diagnostics"] == []


def test_json_output_decodes_to_file_reports(project, capsys) -> None:
    assert main(["--format", "json", "bad.html", "good.html"]) == EXIT_VIOLATIONS
    out = capsys.readouterr().out.strip()
    reports = JsonSerializer[FileReport]().decode(out.encode(), FileReport)
    assert [(r.path, r.language) for r in reports] == [
        ("bad.html", "html"),
        ("good.html", "html"),
    ]
    [diagnostic] = reports[0].diagnostics
    assert diagnostic.code == "p-no-div"
    assert diagnostic.range.start.line == 1
    assert reports[1].diagnostics == []


def test_language_override(project, capsys) -> None:
    assert main(["--language", "html", "components/notes.txt"]) == EXIT_VIOLATIONS
    assert "[p-no-div]" in capsys.readouterr().out


def test_unknown_suffix_is_skipped(project, capsys) -> None:
    assert main(["components/notes.txt"]) == EXIT_OK
    assert capsys.readouterr().out == ""


def test_missing_file_is_logged_and_skipped(project, capsys) -> None:
    assert main(["missing.html", "good.html"]) == EXIT_OK
    assert "missing.html" in capsys.readouterr().err


def test_stdin(project, capsys, monkeypatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("<table><div></div></table>"))
    assert main(["-"]) == EXIT_VIOLATIONS
    assert capsys.readouterr().out.startswith("-:1:8: error: ")


def test_config_file_is_applied(project, capsys) -> None:
    (project / "pyproject.toml").write_text(
        '[tool.html-nesting-linter]\nseverity = "info"\n'
    )
    assert main(["bad.html"]) == EXIT_OK
    assert ": info: " in capsys.readouterr().out


def test_bad_config_exits_with_usage_error(project, capsys) -> None:
    (project / "pyproject.toml").write_text("[tool.html-nesting-linter]\ncolour = 1\n")
    assert main(["bad.html"]) == EXIT_USAGE
    assert capsys.readouterr().err.startswith("error: Invalid")


def test_missing_config_path_exits_with_usage_error(project, capsys) -> None:
    assert main(["--config", "nope.toml", "bad.html"]) == EXIT_USAGE


def test_no_paths_is_a_usage_error(project) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == EXIT_USAGE


def test_explain(capsys) -> None:
    assert main(["--explain", "P", "div"]) == EXIT_OK
    out = capsys.readouterr().out
    assert out.startswith("<div> inside <p>: ")
    assert "developer.mozilla.org" in out


def test_explain_allowed_pair(capsys) -> None:
    assert main(["--explain", "div", "p"]) == EXIT_OK
    assert capsys.readouterr().out.startswith("No rule forbids <p> directly inside <div>.")


def test_list_rules_for_parent(capsys) -> None:
    assert main(["--list-rules", "tr"]) == EXIT_OK
    lines = capsys.readouterr().out.splitlines()
    assert lines
    assert all(line[2:].startswith("tr > ") for line in lines)
    assert not any(line[2:].startswith("tr > td:") for line in lines)


def test_list_all_rules_marks_explicit(capsys) -> None:
    assert main(["--list-rules"]) == EXIT_OK
    lines = capsys.readouterr().out.splitlines()
    assert any(line.startswith("* p > div: ") for line in lines)
    assert any(line.startswith("  ") for line in lines)
