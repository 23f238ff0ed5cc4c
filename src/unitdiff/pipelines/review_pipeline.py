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

from concurrent.futures import ThreadPoolExecutor

from loguru import logger

from unitdiff.context import ReviewContext
from unitdiff.core.data.code_block import FileFailure, FileReview, ReviewPayload
from unitdiff.core.diff.diff_parser import DiffParser
from unitdiff.core.diff.whitespace_filter import should_skip
from unitdiff.core.exceptions import ExtractionError, source_unavailable
from unitdiff.core.extractor.unit_extractor import raw_line_blocks
from unitdiff.core.file_reader.git_file_reader import GitFileReader
from unitdiff.core.file_reader.protocol import FileReader
from unitdiff.core.git_commands.git_commands import FileDiffText
from unitdiff.core.logging.utils import log_payload, time_block


class ReviewPipeline:
    """
    Turns the diff between two revisions into the code blocks a reviewer
    needs to see.

    For every changed file:
    1. Parse its zero-context diff into hunks
    2. Drop it if only whitespace changed
    3. Parse the new revision into declarations (or fall back to raw lines
       for file types without a grammar, when enabled)
    4. Keep the declarations whose line range overlaps a changed line

    Files that cannot be parsed are reported as failures, the rest of the run
    carries on.
    """

    def __init__(self, context: ReviewContext):
        self.context = context
        self.config = context.config

    def run(self, base_rev: str, new_rev: str) -> ReviewPayload:
        git_commands = self.context.git_commands

        if self.config.fetch_remote:
            with time_block("git fetch"):
                git_commands.fetch()

        base_hash = git_commands.resolve_revision(base_rev)
        new_hash = git_commands.resolve_revision(new_rev)

        with time_block("raw diff generation"):
            file_diffs = git_commands.get_changed_files(base_hash, new_hash)

        logger.info(
            f"{len(file_diffs)} files changed between {base_rev} and {new_rev}"
        )

        file_reader = GitFileReader(git_commands, new_hash)
        with time_block("unit extraction"):
            payload = self.process_files(file_diffs, file_reader, new_rev)

        log_payload("unit extraction", payload)
        if payload.has_failures():
            logger.warning(f"{len(payload.failures)} files could not be extracted")
        return payload

    def process_files(
        self,
        file_diffs: list[FileDiffText],
        file_reader: FileReader,
        revision: str = "new revision",
    ) -> ReviewPayload:
        """Process every file, keeping the input order in the payload."""

        def process(file_diff: FileDiffText) -> FileReview | FileFailure | None:
            try:
                return self.process_file(file_diff, file_reader, revision)
            except ExtractionError as e:
                reason = f"{e.message}: {e.details}" if e.details else e.message
                logger.warning(f"Failed to extract {file_diff.file_path}: {reason}")
                return FileFailure(file_diff.file_path, reason)

        if self.config.max_workers > 1 and len(file_diffs) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                # map yields results in submission order
                outcomes = list(executor.map(process, file_diffs))
        else:
            outcomes = [process(file_diff) for file_diff in file_diffs]

        payload = ReviewPayload()
        for outcome in outcomes:
            if isinstance(outcome, FileReview):
                payload.reviews.append(outcome)
            elif isinstance(outcome, FileFailure):
                payload.failures.append(outcome)

        return payload

    def process_file(
        self,
        file_diff: FileDiffText,
        file_reader: FileReader,
        revision: str = "new revision",
    ) -> FileReview | None:
        """
        Runs the whole per-file flow for one changed file.

        Returns:
            The file's review entry, or None when the file is dropped

        Raises:
            ExtractionError: the file has real changes but its new revision
                cannot be read or parsed
        """
        file_path = file_diff.file_path

        if file_diff.is_deleted:
            logger.info(f"Skipping deleted file '{file_path}'")
            return None

        if file_diff.is_binary:
            logger.info(f"Skipping binary file '{file_path}'")
            return None

        if file_diff.is_rename:
            logger.debug(f"'{file_diff.old_path}' renamed to '{file_path}'")

        parsed_diff = DiffParser.parse(file_diff.raw_diff_text)
        if should_skip(file_path, parsed_diff):
            return None

        file_parser = self.context.file_parser
        if not file_parser.supports(file_path):
            if not self.config.raw_fallback:
                logger.info(f"Skipping unsupported file type '{file_path}'")
                return None

            logger.info(
                f"Forwarding raw added lines of unsupported file '{file_path}'"
            )
            code_blocks = raw_line_blocks(parsed_diff)
            return FileReview(file_path, tuple(code_blocks)) if code_blocks else None

        file_content = file_reader.read(file_path)
        if file_content is None:
            raise source_unavailable(file_path, revision)

        syntax_units = file_parser.parse_source(file_path, file_content)
        code_blocks = self.context.unit_extractor.extract(
            file_path, parsed_diff, syntax_units
        )
        if not code_blocks:
            return None

        return FileReview(file_path, tuple(code_blocks))
