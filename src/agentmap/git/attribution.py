"""Diff attribution — which definitions a file's hunks touched, and by how much.

Line numbers on both sides are new-file numbers: the extractor parsed the
same content git used as the "new" side, so hunk positions need no shifting.

Counting rules for one hunk against a definition span ``[start, end]``:

* added lines are the hunk's new-side lines clipped to the span;
* old-side line ``k`` is anchored on new line ``new_start + min(k, new_count - 1)``
  (replacements pair up line by line, surplus removals sit on the last
  added line) and is counted when the anchor falls inside the span;
* a pure deletion (``new_count == 0``) removed lines between ``new_start``
  and ``new_start + 1``, so it counts when ``start <= new_start < end``.

Deleted counts are therefore hunk-overlap approximations. The old-file
position of a definition is not known without parsing the baseline.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from agentmap.extract.models import ChangeStatus, Definition, DefinitionDiff
from agentmap.git.models import DiffHunk, FileDiff


def _overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> int:
    return max(0, min(a_end, b_end) - max(a_start, b_start) + 1)


def hunk_contribution(hunk: DiffHunk, start: int, end: int) -> Tuple[int, int]:
    """(added, deleted) lines of *hunk* that belong to the span ``[start, end]``."""
    if hunk.new_count == 0:
        deleted = hunk.old_count if start <= hunk.new_start < end else 0
        return 0, deleted

    last_new = hunk.new_start + hunk.new_count - 1
    added = _overlap(hunk.new_start, last_new, start, end)

    deleted = 0
    if hunk.old_count:
        paired = min(hunk.old_count, hunk.new_count)
        # Old lines 0..paired-1 land on new_start..new_start+paired-1.
        deleted = _overlap(hunk.new_start, hunk.new_start + paired - 1, start, end)
        surplus = hunk.old_count - paired
        if surplus and start <= last_new <= end:
            deleted += surplus
    return added, deleted


def touches(hunk: DiffHunk, start: int, end: int) -> bool:
    if hunk.new_count == 0:
        return start <= hunk.new_start < end
    return hunk.new_start <= end and hunk.new_end >= start


def definition_diff(
    start: int, end: int, hunks: Sequence[DiffHunk]
) -> Optional[DefinitionDiff]:
    """Summarise *hunks* (all touching the span) into a DefinitionDiff."""
    added = deleted = 0
    touched = False
    for hunk in hunks:
        if not touches(hunk, start, end):
            continue
        touched = True
        a, d = hunk_contribution(hunk, start, end)
        added += a
        deleted += d
    if not touched:
        return None
    span = end - start + 1
    status = ChangeStatus.ADDED if added == span and deleted == 0 else ChangeStatus.UPDATED
    return DefinitionDiff(status=status, added=added, deleted=deleted)


def attribute(
    definitions: Sequence[Definition],
    file_diff: Optional[FileDiff],
) -> List[Definition]:
    """Return *definitions* with ``diff`` set wherever a hunk overlaps.

    The input list and its Definition objects are left untouched. Hunks are
    expected in new-file order; definitions are visited by start line with a
    cursor that only moves forward.
    """
    if file_diff is None or not file_diff.hunks:
        return list(definitions)

    hunks = file_diff.hunks
    order = sorted(range(len(definitions)), key=lambda i: definitions[i].start_line)
    result: List[Definition] = list(definitions)

    cursor = 0
    for i in order:
        definition = definitions[i]
        start, end = definition.start_line, definition.end_line

        # Hunks ending before this start cannot reach any later definition either.
        while cursor < len(hunks) and hunks[cursor].new_end < start:
            cursor += 1

        touching: List[DiffHunk] = []
        j = cursor
        while j < len(hunks) and hunks[j].new_start <= end:
            touching.append(hunks[j])
            j += 1

        diff = definition_diff(start, end, touching)
        if diff is not None:
            result[i] = replace(definition, diff=diff)
    return result


def any_changes(definitions: Sequence[Definition]) -> bool:
    """True if at least one definition carries a DefinitionDiff."""
    return any(d.diff is not None for d in definitions)
