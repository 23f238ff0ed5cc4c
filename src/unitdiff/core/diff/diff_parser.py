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

import re

from loguru import logger

from ..data.change_hunk import ChangeHunk, ParsedDiff


class DiffParser:
    """
    Parses the unified diff text of a single file into ChangeHunks.

    Expects zero-context diffs (git diff --unified=0) but handles context
    lines correctly. Never raises: anything it does not understand is ignored.
    """

    _HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")

    _METADATA_PREFIXES = (
        "diff ",
        "index ",
        "--- ",
        "+++ ",
        "\\ ",
    )

    @classmethod
    def parse(cls, raw_diff_text: str | None) -> ParsedDiff:
        if not raw_diff_text:
            return ParsedDiff()

        hunks: list[ChangeHunk] = []

        # state of the hunk being folded, header is None while in NoHunk
        header: tuple[int, int, int, int] | None = None
        added: dict[int, str] = {}
        removed: dict[int, str] = {}
        old_line = 0
        new_line = 0

        for line in cls._split_lines(raw_diff_text):
            if line.startswith("@@"):
                if header is not None:
                    hunks.append(ChangeHunk(*header, added, removed))

                header = cls._parse_header(line)
                added, removed = {}, {}
                if header is None:
                    logger.debug(f"Ignoring malformed hunk header: {line!r}")
                    continue

                old_line, new_line = header[0], header[1]
                continue

            if header is None or cls._is_metadata(line):
                continue

            if line.startswith("+"):
                added[new_line] = line[1:]
                new_line += 1
            elif line.startswith("-"):
                removed[old_line] = line[1:]
                old_line += 1
            else:
                old_line += 1
                new_line += 1

        if header is not None:
            hunks.append(ChangeHunk(*header, added, removed))

        return ParsedDiff(tuple(hunks))

    @classmethod
    def _parse_header(cls, line: str) -> tuple[int, int, int, int] | None:
        """
        Extract (old_start, new_start, old_len, new_len) from a
        `@@ -a[,b] +c[,d] @@` header. A missing length means 1.
        """
        match = cls._HUNK_HEADER_RE.match(line)
        if not match:
            return None

        old_start, old_len, new_start, new_len = match.groups()
        return (
            int(old_start),
            int(new_start),
            int(old_len) if old_len is not None else 1,
            int(new_len) if new_len is not None else 1,
        )

    @classmethod
    def _is_metadata(cls, line: str) -> bool:
        return line.startswith(cls._METADATA_PREFIXES)

    @staticmethod
    def _split_lines(text: str) -> list[str]:
        # split on \n only, str.splitlines would also break on form feeds etc.
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return [line[:-1] if line.endswith("\r") else line for line in lines]
