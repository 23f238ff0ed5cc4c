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

from loguru import logger

from ..data.change_hunk import ParsedDiff


def is_only_whitespace(parsed_diff: ParsedDiff) -> bool:
    """True if every added and removed line is empty or blank."""
    return parsed_diff.is_only_whitespace()


def should_skip(file_path: str, parsed_diff: ParsedDiff) -> bool:
    """
    Checks a freshly parsed diff and logs when the file carries no observable
    change (reformatting, blank line churn, an empty or binary diff).
    """
    if all(hunk.is_empty() for hunk in parsed_diff):
        logger.info(f"No line changes in '{file_path}'")
        return True
    if is_only_whitespace(parsed_diff):
        logger.info(f"Skipping whitespace-only changes in '{file_path}'")
        return True
    return False
