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

import json
from dataclasses import dataclass, field
from typing import Literal

from .syntax_unit import UnitKind

# "raw" marks blocks produced by the unsupported-file fallback
BlockKind = UnitKind | Literal["raw"]


@dataclass(frozen=True)
class CodeBlock:
    kind: BlockKind
    source_text: str
    name: str | None = None

    def to_dict(self) -> dict:
        data = {"type": self.kind}
        if self.name is not None:
            data["name"] = self.name
        data["code"] = self.source_text
        return data


@dataclass(frozen=True)
class FileReview:
    file_path: str
    code_blocks: tuple[CodeBlock, ...]

    def to_dict(self) -> dict:
        return {
            "file": self.file_path,
            "code": [block.to_dict() for block in self.code_blocks],
        }


@dataclass(frozen=True)
class FileFailure:
    file_path: str
    reason: str

    def to_dict(self) -> dict:
        return {"file": self.file_path, "reason": self.reason}


@dataclass
class ReviewPayload:
    """Best-effort result of a run: the reviewable files plus what failed."""

    reviews: list[FileReview] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)

    def has_failures(self) -> bool:
        return bool(self.failures)

    def total_blocks(self) -> int:
        return sum(len(review.code_blocks) for review in self.reviews)

    def to_document(self) -> list[dict]:
        return [review.to_dict() for review in self.reviews]

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_document(), indent=indent, ensure_ascii=False)
