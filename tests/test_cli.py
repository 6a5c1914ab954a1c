import json

from spfxcheck import cli

from conftest import write_json


def test_cli_generates_json_upgrade_report(project_dir, tmp_path):
    output_path = tmp_path / "upgrade.json"

    exit_code = cli.main(
        ["upgrade", "--project", str(project_dir), "--to", "1.9.1", "--output", "json", "--output-file", str(output_path)]
    )

    assert exit_code == 0
    data = json.loads(output_path.read_text(encoding="utf-8"))
    ids = [finding["id"] for finding in data]
    assert "FN001001" in ids
    assert data[ids.index("FN010001")]["severity"] == "Recommended"
    assert all(finding["occurrences"] for finding in data)


def test_cli_prints_text_report_by_default(project_dir, capsys):
    exit_code = cli.main(["upgrade", "--project", str(project_dir / "src")])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Upgrade project hello-world from 1.8.2 to 1.9.1" in captured.out


def test_cli_externalize_markdown(project_dir, tmp_path):
    output_path = tmp_path / "deps-report.md"

    exit_code = cli.main(
        ["externalize", "--project", str(project_dir), "--output", "md", "--output-file", str(output_path)]
    )

    assert exit_code == 0
    document = output_path.read_text(encoding="utf-8")
    assert "# Externalizing dependencies of project hello-world" in document
    assert "https://unpkg.com/jquery@3.4.1/dist/jquery.min.js" in document


def test_cli_uses_project_config_file(project_dir, capsys):
    (project_dir / ".spfx-check.yaml").write_text("output: json\npackage_manager: yarn\n", encoding="utf-8")

    exit_code = cli.main(["upgrade", "--project", str(project_dir)])

    captured = capsys.readouterr()
    assert exit_code == 0
    data = json.loads(captured.out)
    resolutions = [finding["resolution"] for finding in data if finding["resolutionType"] == "cmd"]
    assert any(resolution.startswith("yarn add -E") for resolution in resolutions)


def test_cli_reports_missing_project(tmp_path, capsys):
    exit_code = cli.main(["upgrade", "--project", str(tmp_path)])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "Couldn't find project root folder" in captured.err


def test_cli_accepts_project_without_yo_rc(project_dir, capsys):
    (project_dir / ".yo-rc.json").unlink()

    exit_code = cli.main(["externalize", "--project", str(project_dir), "--output", "json"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "jquery" in json.loads(captured.out)["externalConfiguration"]["externals"]


def test_cli_reports_unsupported_version(project_dir, capsys):
    write_json(project_dir / ".yo-rc.json", {"@microsoft/generator-sharepoint": {"version": "0.9.0"}})

    exit_code = cli.main(["externalize", "--project", str(project_dir)])

    captured = capsys.readouterr()
    assert exit_code == 2
    assert "Supported versions are 1.0.0" in captured.err


def test_cli_reports_undetectable_version(project_dir, capsys):
    write_json(project_dir / ".yo-rc.json", {"@microsoft/generator-sharepoint": {}})
    write_json(project_dir / "package.json", {"name": "hello-world"})

    exit_code = cli.main(["upgrade", "--project", str(project_dir)])

    captured = capsys.readouterr()
    assert exit_code == 3
    assert "Unable to determine the version" in captured.err


def test_cli_rejects_missing_output_directory(project_dir, tmp_path, capsys):
    exit_code = cli.main(
        ["externalize", "--project", str(project_dir), "--output-file", str(tmp_path / "nope" / "report.md")]
    )

    captured = capsys.readouterr()
    assert exit_code == 5
    assert "doesn't exist" in captured.err
