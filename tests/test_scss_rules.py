from spfxcheck.engine import run_upgrade_rules
from spfxcheck.model import SourceFile
from spfxcheck.rules.scss import ScssAddImportRule, ScssRemoveImportRule

from conftest import REACT_YO_RC, make_project

IMPORT_VALUE = "~fabric-ui/react"


def react_project(*scss_files):
    return make_project(yo_rc_json=REACT_YO_RC, scss_files=scss_files)


def test_no_findings_when_import_is_already_there():
    project = react_project(SourceFile("some/path", f"@import '{IMPORT_VALUE}';"))

    findings = run_upgrade_rules([ScssAddImportRule(IMPORT_VALUE)], project)

    assert findings == []


def test_reports_missing_import():
    project = react_project(SourceFile("some/path", ""))

    findings = run_upgrade_rules([ScssAddImportRule(IMPORT_VALUE)], project)

    assert len(findings) == 1
    assert len(findings[0].occurrences) == 1
    assert findings[0].occurrences[0].resolution == "@import '~fabric-ui/react'"
    assert findings[0].occurrences[0].file == "some/path"
    assert findings[0].id == "FN022002"


def test_no_findings_without_scss_files():
    findings = run_upgrade_rules([ScssAddImportRule(IMPORT_VALUE)], react_project())

    assert findings == []


def test_no_findings_for_non_react_project():
    project = make_project(
        yo_rc_json={"@microsoft/generator-sharepoint": {"framework": "none"}},
        scss_files=(SourceFile("some/path", ""),),
    )

    findings = run_upgrade_rules([ScssAddImportRule(IMPORT_VALUE)], project)

    assert findings == []


def test_react_dependency_marks_project_as_react():
    project = make_project(dependencies={"react": "16.7.0"}, scss_files=(SourceFile("some/path", ""),))

    findings = run_upgrade_rules([ScssAddImportRule(IMPORT_VALUE)], project)

    assert len(findings) == 1


def test_rule_file_name_is_empty():
    rule = ScssAddImportRule(IMPORT_VALUE)

    assert rule.file == ""


def test_empty_import_value_does_not_raise():
    rule = ScssAddImportRule("")
    project = react_project(SourceFile("some/path", ""))

    assert rule.visit(project) == []
    assert rule.id == "FN022002"
    assert rule.resolution == "@import ''"


def test_remove_import_flags_files_with_import():
    project = react_project(
        SourceFile("a.scss", "@import '~old/fabric.scss';"),
        SourceFile("b.scss", ".b { color: red; }"),
    )

    occurrences = ScssRemoveImportRule("~old/fabric.scss").visit(project)

    assert [occurrence.file for occurrence in occurrences] == ["a.scss"]


def test_remove_import_reports_line_and_character():
    project = react_project(SourceFile("a.scss", ".a { color: red; }\n  @import '~old/fabric.scss';\n"))

    findings = run_upgrade_rules([ScssRemoveImportRule("~old/fabric.scss")], project)

    occurrence = findings[0].occurrences[0]
    assert occurrence.position == {"line": 2, "character": 12}
    assert occurrence.to_dict()["position"] == {"line": 2, "character": 12}
