import json
from datetime import date

from spfxcheck import report
from spfxcheck.result import (
    ExternalizeEntry,
    ExternalizeResult,
    FileEdit,
    Finding,
    Occurrence,
    UpgradeResult,
)
from spfxcheck.severity import Severity

TODAY = date(2020, 5, 1)


def externalize_result():
    return ExternalizeResult(
        project_name="hello-world",
        entries=[
            ExternalizeEntry("jquery", "https://unpkg.com/jquery@3.4.1/dist/jquery.min.js", global_name="jQuery"),
            ExternalizeEntry("moment", "https://unpkg.com/moment@2.24.0/min/moment.min.js"),
        ],
        edits=[
            FileEdit(path="a.js", action="add", target_value="import x"),
            FileEdit(path="a.js", action="remove", target_value="import y"),
        ],
    )


def upgrade_result():
    finding = Finding(
        id="FN001001",
        title="@microsoft/sp-core-library",
        description="Upgrade SharePoint Framework dependency package @microsoft/sp-core-library",
        resolution="npm i -SE @microsoft/sp-core-library@1.9.1",
        resolution_type="cmd",
        severity=Severity.REQUIRED,
        file="./package.json",
        occurrences=(Occurrence("./package.json", "npm i -SE @microsoft/sp-core-library@1.9.1"),),
    )
    return UpgradeResult("hello-world", "1.8.2", "1.9.1", [finding])


def test_markdown_has_one_block_per_action_for_a_file():
    document = report.render(externalize_result(), "md", today=TODAY)

    section = document.split("#### [a.js](a.js)")[1]
    assert document.count("#### [a.js](a.js)") == 1
    assert section.count("add:") == 1
    assert section.count("remove:") == 1
    blocks = section.split("```JavaScript\n")[1:]
    assert [block.split("\n```")[0].splitlines() for block in blocks] == [["import x"], ["import y"]]


def test_markdown_embeds_externals_payload():
    document = report.render(externalize_result(), "md", today=TODAY)

    assert document.startswith("# Externalizing dependencies of project hello-world")
    assert "Date: 2020-05-01" in document
    payload = document.split("```json\n")[1].split("\n```")[0]
    assert json.loads(payload) == {"externals": externalize_result().externals()}


def test_markdown_skips_empty_action_groups():
    result = ExternalizeResult("p", edits=[FileEdit("b.ts", "add", "import b")])

    document = report.render(result, "md", today=TODAY)

    assert "add:" in document
    assert "remove:" not in document


def test_externals_without_global_name_are_plain_paths():
    externals = externalize_result().externals()

    assert externals["moment"] == "https://unpkg.com/moment@2.24.0/min/moment.min.js"
    assert externals["jquery"] == {
        "path": "https://unpkg.com/jquery@3.4.1/dist/jquery.min.js",
        "globalName": "jQuery",
        "globalDependencies": [],
    }


def test_externalize_json_round_trip():
    original = externalize_result()

    data = json.loads(report.render(original, "json"))

    assert ExternalizeResult.from_dict("hello-world", data) == original


def test_upgrade_json_round_trip():
    original = upgrade_result()

    data = json.loads(report.render(original, "json"))

    assert data[0]["resolutionType"] == "cmd"
    assert UpgradeResult.from_dict("hello-world", "1.8.2", "1.9.1", data) == original


def test_externalize_text_is_trimmed_json_projection():
    text = report.render(externalize_result(), "text")

    assert text.startswith("In the config/config.json file update the externals property to:")
    assert text == text.strip()
    assert '"externalConfiguration"' in text


def test_upgrade_text_lists_occurrences():
    text = report.render(upgrade_result(), "text")

    assert "[Required] FN001001 @microsoft/sp-core-library" in text
    assert "npm i -SE @microsoft/sp-core-library@1.9.1" in text


def test_upgrade_markdown_has_summary_table():
    document = report.render(upgrade_result(), "md", today=TODAY)

    assert "# Upgrade project hello-world to v1.9.1" in document
    assert "| FN001001 | @microsoft/sp-core-library | Required |" in document
    assert "```sh\nnpm i -SE @microsoft/sp-core-library@1.9.1\n```" in document


def test_up_to_date_project_text():
    result = UpgradeResult("hello-world", "1.9.1", "1.9.1")

    assert report.render(result) == "Project hello-world is already on version 1.9.1"


def test_switching_output_mode_does_not_change_result():
    result = externalize_result()
    before = result.to_dict()

    for output in ("text", "json", "md"):
        report.render(result, output, today=TODAY)

    assert result.to_dict() == before


def test_upgrade_markdown_table_lists_required_findings_first():
    optional = Finding(
        id="FN022001",
        title="Scss file import",
        description="Remove scss file import",
        resolution="@import '~old/fabric.scss'",
        resolution_type="scss",
        severity=Severity.OPTIONAL,
        file="",
        occurrences=(Occurrence("a.scss", "@import '~old/fabric.scss'", {"line": 3, "character": 1}),),
    )
    result = upgrade_result()
    result.findings.insert(0, optional)

    document = report.render(result, "md", today=TODAY)

    assert document.index("| FN001001 |") < document.index("| FN022001 |")
    assert "  a.scss:3:" in report.render(result, "text")
