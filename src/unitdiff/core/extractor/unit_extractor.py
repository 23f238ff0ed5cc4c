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

from typing import Literal

from loguru import logger

from ..data.change_hunk import ParsedDiff
from ..data.code_block import CodeBlock
from ..data.syntax_unit import SyntaxUnit

# closed: a change on any line in [start, end] touches the unit, including the
#   signature and closing lines.
# body: the first and last line of a unit are ignored, unless the unit is
#   shorter than three lines and has no interior.
RangePolicy = Literal["closed", "body"]


class UnitExtractor:
    """Selects the declarations of a file whose line range overlaps a change."""

    def __init__(self, range_policy: RangePolicy = "closed"):
        self.range_policy = range_policy

    def extract(
        self,
        file_path: str,
        parsed_diff: ParsedDiff,
        syntax_units: list[SyntaxUnit],
    ) -> list[CodeBlock]:
        """
        Args:
            file_path: Path of the file, used for logging only
            parsed_diff: Hunks of the file's diff
            syntax_units: Declarations of the file's new revision, in the order
                they should appear in the output

        Returns:
            One CodeBlock per touched unit, in the order of syntax_units
        """
        code_blocks: list[CodeBlock] = []
        skipped = 0

        for unit in syntax_units:
            if not unit.has_range():
                skipped += 1
                continue

            if not self.touches(parsed_diff, unit):
                continue

            code_blocks.append(
                CodeBlock(
                    kind=unit.kind,
                    source_text=unit.source_text,
                    name=unit.name if unit.kind == "callable" else None,
                )
            )

        if skipped:
            logger.debug(f"{skipped} units without position info in {file_path}")

        if not code_blocks:
            logger.info(
                f"Changes in '{file_path}' do not touch any declaration, dropping file"
            )
        else:
            logger.debug(f"Extracted {len(code_blocks)} code blocks from {file_path}")

        return code_blocks

    def touches(self, parsed_diff: ParsedDiff, unit: SyntaxUnit) -> bool:
        start, end = unit.start_line, unit.end_line
        if self.range_policy == "body" and unit.line_count() >= 3:
            return parsed_diff.touches_range(start + 1, end - 1)
        return parsed_diff.touches_range(start, end)


def raw_line_blocks(parsed_diff: ParsedDiff) -> list[CodeBlock]:
    """
    Degraded output for files without a grammar: the non blank added lines of
    every hunk, joined into one block.
    """
    added = [
        line for hunk in parsed_diff.to_minimal_diff()["hunks"] for line in hunk["added"]
    ]
    if not added:
        return []
    return [CodeBlock(kind="raw", source_text="\n".join(added))]
