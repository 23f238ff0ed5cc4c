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

"""Extracts the declarations touched by a change set, ready for review."""

from .context import ExtractionConfig, ReviewContext
from .core.data.code_block import CodeBlock, FileFailure, FileReview, ReviewPayload
from .pipelines.review_pipeline import ReviewPipeline
from .review import review_changes

__all__ = [
    "CodeBlock",
    "ExtractionConfig",
    "FileFailure",
    "FileReview",
    "ReviewContext",
    "ReviewPayload",
    "ReviewPipeline",
    "review_changes",
]
