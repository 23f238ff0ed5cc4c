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

from dataclasses import dataclass
from typing import Literal

UnitKind = Literal["callable", "field", "import", "annotation"]

# presentation order of kinds inside a file's code blocks
KIND_ORDER: tuple[UnitKind, ...] = ("callable", "field", "import", "annotation")


@dataclass(frozen=True)
class SyntaxUnit:
    """A single declaration reported by the syntax-tree provider.

    Lines are 1-based and refer to the new revision of the file. Either bound
    may be None when the parser could not position the declaration.
    """

    kind: UnitKind
    start_line: int | None
    end_line: int | None
    source_text: str
    name: str | None = None

    def has_range(self) -> bool:
        return self.start_line is not None and self.end_line is not None

    def line_count(self) -> int:
        if not self.has_range():
            return 0
        return self.end_line - self.start_line + 1
