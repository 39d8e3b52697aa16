"""Tests for attributing diff hunks to definitions."""

from agentmap.extract.models import ChangeStatus, Definition, DefinitionDiff
from agentmap.git.attribution import any_changes, attribute, hunk_contribution, touches
from agentmap.git.models import DiffHunk, FileDiff
from agentmap.languages.models import DefinitionKind


def _fn(name: str, start: int, end: int) -> Definition:
    return Definition(name=name, start_line=start, end_line=end, kind=DefinitionKind.FUNCTION)


def _diff(*hunks: DiffHunk) -> FileDiff:
    return FileDiff(path="a.py", hunks=list(hunks))


class TestScenarios:
    def test_no_intersecting_hunks(self):
        process = _fn("process", 1, 9)
        result = attribute([process], _diff(DiffHunk(20, 1, 20, 1)))
        assert result == [process]
        assert result[0].diff is None

    def test_whole_definition_added(self):
        result = attribute([_fn("process", 1, 9)], _diff(DiffHunk(0, 0, 1, 9)))
        assert result[0].diff == DefinitionDiff(ChangeStatus.ADDED, added=9, deleted=0)

    def test_hunk_inside_body_updates(self):
        result = attribute([_fn("process", 5, 14)], _diff(DiffHunk(7, 1, 7, 2)))
        assert result[0].diff == DefinitionDiff(ChangeStatus.UPDATED, added=2, deleted=1)

    def test_no_file_diff(self):
        defs = [_fn("process", 1, 9)]
        assert attribute(defs, None) == defs


class TestHunkContribution:
    def test_partial_overlap_clipped(self):
        # new lines 8..12 against span 1..10
        assert hunk_contribution(DiffHunk(8, 0, 8, 5), 1, 10) == (3, 0)

    def test_surplus_deletions_on_last_added_line(self):
        # 4 old lines replaced by 2 new ones, inside the span
        assert hunk_contribution(DiffHunk(5, 4, 5, 2), 1, 10) == (2, 4)

    def test_pure_deletion_inside(self):
        assert hunk_contribution(DiffHunk(6, 3, 5, 0), 1, 10) == (0, 3)

    def test_pure_deletion_after_last_line(self):
        # removed after line 10, the definition's last line
        assert hunk_contribution(DiffHunk(11, 3, 10, 0), 1, 10) == (0, 0)

    def test_touches(self):
        assert touches(DiffHunk(0, 0, 10, 1), 1, 10)
        assert not touches(DiffHunk(0, 0, 11, 1), 1, 10)
        assert touches(DiffHunk(3, 2, 2, 0), 1, 10)


class TestAttribute:
    def test_multiple_hunks_accumulate(self):
        result = attribute(
            [_fn("big", 1, 30)],
            _diff(DiffHunk(2, 0, 2, 3), DiffHunk(20, 2, 23, 1)),
        )
        assert result[0].diff == DefinitionDiff(ChangeStatus.UPDATED, added=4, deleted=2)

    def test_hunk_spanning_two_definitions(self):
        first, second = _fn("first", 1, 10), _fn("second", 12, 20)
        result = attribute([first, second], _diff(DiffHunk(9, 0, 9, 5)))
        assert result[0].diff == DefinitionDiff(ChangeStatus.UPDATED, added=2, deleted=0)
        assert result[1].diff == DefinitionDiff(ChangeStatus.UPDATED, added=2, deleted=0)

    def test_unsorted_definitions_keep_input_order(self):
        late, early = _fn("late", 40, 50), _fn("early", 1, 10)
        result = attribute([late, early], _diff(DiffHunk(0, 0, 3, 1), DiffHunk(44, 1, 44, 1)))
        assert [d.name for d in result] == ["late", "early"]
        assert result[0].diff is not None
        assert result[1].diff is not None

    def test_inputs_not_mutated(self):
        defs = [_fn("process", 1, 9)]
        attribute(defs, _diff(DiffHunk(0, 0, 1, 9)))
        assert defs[0].diff is None

    def test_any_changes(self):
        assert not any_changes([_fn("a", 1, 9)])
        assert any_changes(attribute([_fn("a", 1, 9)], _diff(DiffHunk(0, 0, 2, 1))))
