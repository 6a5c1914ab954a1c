from spfxcheck.model import PackageManifest, is_react_project
from spfxcheck.utils import detect_version, find_project_root, load_project
from spfxcheck.utils.fileio import strip_json_comments

from conftest import write_json


def test_find_project_root_walks_up(project_dir):
    nested = project_dir / "src" / "webparts"

    assert find_project_root(nested) == project_dir.resolve()


def test_load_project_snapshot(project_dir):
    write_json(project_dir / "node_modules" / "jquery" / "package.json", {"version": "3.4.1"})

    project = load_project(project_dir)

    assert project.version == "1.8.2"
    assert project.package_json.name == "hello-world"
    assert project.package_json.version_of("jquery") == "^3.4.1"
    assert project.document("config/config.json") == {"version": "2.0"}
    assert [scss.path for scss in project.scss_files] == [
        "src/webparts/helloWorld/components/HelloWorld.module.scss"
    ]
    assert "config/config.json" in project.files
    assert project.installed_packages["jquery"]["version"] == "3.4.1"
    assert is_react_project(project)


def test_version_falls_back_to_core_library():
    manifest = PackageManifest(dependencies={"@microsoft/sp-core-library": "~1.4.1"})

    assert detect_version({}, manifest) == "1.4.1"
    assert detect_version({}, PackageManifest()) is None


def test_json_comments_are_ignored_outside_strings(project_dir):
    (project_dir / "tsconfig.json").write_text(
        '{\n  // compiler settings\n  "extends": "https://example.com/a//b", /* inline */ "x": 1\n}\n',
        encoding="utf-8",
    )

    project = load_project(project_dir)

    assert project.document("tsconfig.json") == {"extends": "https://example.com/a//b", "x": 1}
    assert strip_json_comments('"//keep" // drop') == '"//keep" '


def test_package_json_marks_root_without_yo_rc(tmp_path):
    root = tmp_path / "no-generator"
    write_json(root / "package.json", {"name": "no-generator", "dependencies": {"@microsoft/sp-core-library": "1.8.2"}})
    nested = root / "src"
    nested.mkdir()

    assert find_project_root(nested) == root.resolve()
    assert load_project(find_project_root(nested)).version == "1.8.2"


def test_yo_rc_json_wins_over_nearer_package_json(project_dir):
    nested = project_dir / "src" / "webparts"
    write_json(nested / "package.json", {"name": "nested"})

    assert find_project_root(nested) == project_dir.resolve()
