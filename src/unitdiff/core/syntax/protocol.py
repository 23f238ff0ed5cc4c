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

from typing import Protocol

from ..data.syntax_unit import SyntaxUnit


class SyntaxTreeProvider(Protocol):
    """An interface for turning source text into declarations."""

    def supports(self, file_path: str, file_content: str | None = None) -> bool:
        """Whether a grammar exists for the file's type."""
        ...

    def parse_source(self, file_path: str, file_content: str) -> list[SyntaxUnit]:
        """
        Parses the file content.

        Returns:
            The declarations of the file, each with its 1-based line range.

        Raises:
            UnparsableSourceError: if no trustworthy tree can be produced.
        """
        ...
