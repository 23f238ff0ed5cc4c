# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class ChangeHunk:
    """One `@@ ... @@` region of a unified diff.

    NOTE: added_lines are keyed by new file line numbers, removed_lines by old
    file line numbers. Context lines are never recorded.
    """

    old_start: int
    new_start: int
    old_len: int
    new_len: int
    added_lines: Mapping[int, str] = field(default_factory=dict)
    removed_lines: Mapping[int, str] = field(default_factory=dict)

    def __post_init__(self):
        # freeze the maps so a finished hunk cannot be mutated through them
        object.__setattr__(
            self, "added_lines", MappingProxyType(dict(self.added_lines))
        )
        object.__setattr__(
            self, "removed_lines", MappingProxyType(dict(self.removed_lines))
        )

    def __hash__(self) -> int:
        return hash(
            (
                self.old_start,
                self.new_start,
                self.old_len,
                self.new_len,
                tuple(self.added_lines.items()),
                tuple(self.removed_lines.items()),
            )
        )

    def is_empty(self) -> bool:
        return not self.added_lines and not self.removed_lines

    def changed_line_numbers(self) -> set[int]:
        return set(self.added_lines) | set(self.removed_lines)

    def touches(self, start: int, end: int) -> bool:
        """Whether any added or removed line number lies in [start, end]."""
        return any(start <= line <= end for line in self.added_lines) or any(
            start <= line <= end for line in self.removed_lines
        )

    def is_only_whitespace(self) -> bool:
        return all(not line.strip() for line in self.added_lines.values()) and all(
            not line.strip() for line in self.removed_lines.values()
        )

    def non_blank_added(self) -> list[str]:
        return [line for line in self.added_lines.values() if line.strip()]

    def non_blank_removed(self) -> list[str]:
        return [line for line in self.removed_lines.values() if line.strip()]


@dataclass(frozen=True)
class ParsedDiff:
    """Ordered hunks of a single file's diff."""

    hunks: tuple[ChangeHunk, ...] = ()

    def __len__(self) -> int:
        return len(self.hunks)

    def __iter__(self):
        return iter(self.hunks)

    def is_only_whitespace(self) -> bool:
        # vacuously true for a diff with no hunks
        return all(hunk.is_only_whitespace() for hunk in self.hunks)

    def touches_range(self, start: int, end: int) -> bool:
        return any(hunk.touches(start, end) for hunk in self.hunks)

    def changed_line_numbers(self) -> set[int]:
        lines: set[int] = set()
        for hunk in self.hunks:
            lines |= hunk.changed_line_numbers()
        return lines

    def to_minimal_diff(self) -> dict:
        return {
            "hunks": [
                {"added": hunk.non_blank_added(), "removed": hunk.non_blank_removed()}
                for hunk in self.hunks
            ]
        }
