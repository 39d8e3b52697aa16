"""Tests for map building, truncation and the report formats."""

import json

import yaml
from rich.console import Console

from agentmap.extract.models import ChangeStatus, Definition, DefinitionDiff, Visibility
from agentmap.git.models import FileDiffStats, FileStatus
from agentmap.languages.models import DefinitionKind
from agentmap.output import json_report, terminal, yaml_report
from agentmap.output.builder import (
    FileEntry,
    build_map,
    format_definition,
    format_file_diff,
    root_name_for,
)
from agentmap.output.truncate import truncate_defs, truncate_map
from agentmap.scanner.models import FileResult, ScanResult


def _def(name, start=1, end=10, kind=DefinitionKind.FUNCTION, exported=False, extern=False, diff=None):
    return Definition(
        name=name,
        start_line=start,
        end_line=end,
        kind=kind,
        visibility=Visibility.PUBLIC if exported else Visibility.PRIVATE,
        extern=extern,
        diff=diff,
    )


def _result() -> ScanResult:
    return ScanResult(
        files=[
            FileResult(
                path="src/app.ts",
                description="Application entry point.",
                definitions=[
                    _def("main", 3, 20, exported=True,
                         diff=DefinitionDiff(ChangeStatus.UPDATED, added=5, deleted=2)),
                    _def("VERSION", 22, 22, kind=DefinitionKind.CONST, exported=True),
                ],
                stats=FileDiffStats(added=5, deleted=2),
                status=FileStatus.MODIFIED,
            ),
            FileResult(path="README.md", description="Project\nDoes things."),
            FileResult(path="src/lib/util.ts", description="Helpers."),
        ],
        candidate_files=3,
        diff_enabled=True,
        diff_available=True,
    )


class TestFormatting:
    def test_plain_definition(self):
        assert format_definition(_def("run", 5, 5)) == "line 5, function"

    def test_range_and_flags(self):
        d = _def("run", 5, 12, exported=True, extern=True)
        assert format_definition(d) == "line 5-12, function, exported, extern"

    def test_added_status(self):
        d = _def("run", 1, 9, diff=DefinitionDiff(ChangeStatus.ADDED, added=9))
        assert format_definition(d) == "line 1-9, function, added (+9)"

    def test_status_without_counts(self):
        d = _def("run", 1, 9, diff=DefinitionDiff(ChangeStatus.UPDATED))
        assert format_definition(d) == "line 1-9, function, updated"

    def test_file_diff(self):
        assert format_file_diff(FileDiffStats(15, 3)) == "+15-3"
        assert format_file_diff(FileDiffStats(0, 3)) == "-3"
        assert format_file_diff(FileDiffStats(0, 0)) == ""

    def test_root_name(self, tmp_path):
        assert root_name_for(tmp_path) == tmp_path.name


class TestBuildMap:
    def test_nested_by_path(self):
        tree = build_map(_result().files, "proj")
        root = tree["proj"]
        assert root["README.md"] == {"description": "Project\nDoes things."}
        app = root["src"]["app.ts"]
        assert isinstance(app, FileEntry)
        assert app["diff"] == "+5-2"
        assert app["defs"] == {
            "main": "line 3-20, function, exported, updated (+5-2)",
            "VERSION": "line 22, const, exported",
        }
        assert root["src"]["lib"]["util.ts"] == {"description": "Helpers."}


class TestTruncate:
    def _entry(self, count, exported=()):
        defs = {}
        for i in range(count):
            flag = ", exported" if i in exported else ""
            defs[f"f{i}"] = f"line {i + 1}, function{flag}"
        return FileEntry(description="x", defs=defs)

    def test_under_limit_unchanged(self):
        entry = self._entry(3)
        assert truncate_defs(entry, 5) is entry

    def test_keeps_first_definitions(self):
        result = truncate_defs(self._entry(8), 5)
        assert list(result["defs"]) == ["f0", "f1", "f2", "f3", "f4", "__more_3__"]
        assert result["defs"]["__more_3__"] == "3 more definitions"
        assert result["description"] == "x"

    def test_prefers_exports(self):
        result = truncate_defs(self._entry(8, exported={2, 6}), 5)
        assert "defs" not in result
        assert result["exports"] == {
            "f2": "line 3, function, exported",
            "f6": "line 7, function, exported",
        }

    def test_too_many_exports(self):
        result = truncate_defs(self._entry(8, exported=set(range(8))), 5)
        assert list(result["exports"])[-1] == "__more_3__"
        assert result["exports"]["__more_3__"] == "3 more exports"

    def test_truncate_map_recurses(self):
        tree = {"root": {"src": {"a.py": self._entry(4)}}}
        result = truncate_map(tree, 2)
        assert list(result["root"]["src"]["a.py"]["defs"]) == ["f0", "f1", "__more_2__"]


class TestYamlReport:
    def test_readme_first_then_alphabetical(self):
        tree = {"proj": {"zeta.py": FileEntry(description="z"), "src": {},
                         "README.md": FileEntry(description="r"), "alpha.py": FileEntry(description="a")}}
        ordered = yaml_report.order_tree(tree)
        assert list(ordered["proj"]) == ["README.md", "alpha.py", "src", "zeta.py"]

    def test_entry_key_order(self):
        entry = FileEntry(defs={"a": "line 1, const"}, diff="+1", description="d")
        assert list(yaml_report.order_tree({"f.py": entry})["f.py"]) == ["description", "diff", "defs"]

    def test_renders_loadable_yaml(self):
        text = yaml_report.render(build_map(_result().files, "proj"))
        data = yaml.safe_load(text)
        assert data["proj"]["src"]["app.ts"]["defs"]["main"] == "line 3-20, function, exported, updated (+5-2)"
        assert data["proj"]["README.md"]["description"] == "Project\nDoes things."
        assert "description: |-" in text or "description: |" in text

    def test_more_marker_becomes_comment(self):
        entry = FileEntry(defs={f"f{i}": f"line {i + 1}, const" for i in range(4)})
        text = yaml_report.render(truncate_map({"proj": {"a.py": entry}}, 2))
        assert "# ... 2 more definitions" in text
        assert "__more_" not in text
        assert list(yaml.safe_load(text)["proj"]["a.py"]["defs"]) == ["f0", "f1"]


class TestJsonReport:
    def test_structure(self):
        data = json.loads(json_report.render(_result(), "proj", max_defs=25))
        assert data["root"] == "proj"
        assert [f["path"] for f in data["files"]] == ["README.md", "src/app.ts", "src/lib/util.ts"]
        app = data["files"][1]
        assert app["diff"] == {"added": 5, "deleted": 2, "status": "modified"}
        assert "diff" not in data["files"][0]
        assert app["definitions"][0] == {
            "name": "main",
            "kind": "function",
            "start_line": 3,
            "end_line": 20,
            "exported": True,
            "extern": False,
            "diff": {"status": "updated", "added": 5, "deleted": 2},
        }

    def test_max_defs(self):
        data = json_report.to_dict(_result(), "proj", max_defs=1)
        app = data["files"][1]
        assert len(app["definitions"]) == 1
        assert app["truncated"] == 1

    def test_renamed_file(self):
        result = ScanResult(files=[FileResult(
            path="src/new_name.ts",
            description="Moved.",
            stats=FileDiffStats(added=1, deleted=1),
            status=FileStatus.RENAMED,
            renamed_from="src/old_name.ts",
        )])
        entry = json_report.to_dict(result, "proj", max_defs=25)["files"][0]
        assert entry["diff"] == {
            "added": 1,
            "deleted": 1,
            "status": "renamed",
            "old_path": "src/old_name.ts",
        }


class TestTerminal:
    def test_summary_lists_files(self):
        console = Console(record=True, width=120)
        terminal.render_summary(_result(), console)
        text = console.export_text()
        assert "src/app.ts" in text
        assert "Definitions:" in text

    def test_empty_result(self):
        console = Console(record=True, width=120)
        terminal.render_summary(ScanResult(), console)
        assert "No files mapped" in console.export_text()
