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
from dataclasses import dataclass

from loguru import logger

from ..exceptions import ValidationError, revision_not_found
from ..git_interface.interface import GitInterface


@dataclass(frozen=True)
class FileDiffText:
    """The raw unified diff of one file between two revisions."""

    file_path: str
    raw_diff_text: str
    old_path: str | None = None
    is_deleted: bool = False
    is_binary: bool = False

    @property
    def is_rename(self) -> bool:
        return self.old_path is not None and self.old_path != self.file_path


class GitCommands:
    _A_B_PATHS_RE = re.compile(r"^diff --git a/(.+) b/(.+)$")
    _OLD_PATH_RE = re.compile(r"^--- (.+)$")
    _NEW_PATH_RE = re.compile(r"^\+\+\+ (.+)$")

    def __init__(self, git: GitInterface):
        self.git = git

    def is_git_repository(self) -> bool:
        out = self.git.run_git_text_out(["rev-parse", "--is-inside-work-tree"])
        return out is not None and out.strip() == "true"

    def fetch(self) -> bool:
        """
        Update remote tracking branches so revisions like origin/main resolve
        to their latest state. Failures are not fatal, a repository may well
        have no remote.
        """
        result = self.git.run_git_text(["fetch", "--all", "--quiet"])
        if result is None:
            logger.warning("git fetch failed, continuing with local refs")
            return False
        return True

    def resolve_revision(self, revision: str) -> str:
        """Returns the commit hash a branch, tag or commit-ish points at."""
        if not revision or not revision.strip():
            raise ValidationError("Revision must not be empty")

        out = self.git.run_git_text_out(
            ["rev-parse", "--verify", "--quiet", f"{revision}^{{commit}}"]
        )
        if not out or not out.strip():
            raise revision_not_found(revision)
        return out.strip()

    def get_changed_files(self, base_rev: str, new_rev: str) -> list[FileDiffText]:
        """
        Diff two revisions with zero context lines and split the output into
        one block per changed file, in the order git reports them.
        """
        diff_output = self.git.run_git_text_out(
            [
                "-c",
                "core.quotepath=false",
                "diff",
                "--unified=0",
                "--no-color",
                "--no-ext-diff",
                "-M",
                base_rev,
                new_rev,
            ]
        )
        if diff_output is None:
            raise revision_not_found(f"{base_rev}..{new_rev}")

        return self.split_file_diffs(diff_output)

    def show_file(self, revision: str, path: str) -> str | None:
        # rel_path should be in posix format for git
        rel_path_git = path.replace("\\", "/").strip()
        return self.git.run_git_text_out(
            ["cat-file", "-p", f"{revision}:{rel_path_git}"]
        )

    @classmethod
    def split_file_diffs(cls, diff_output: str) -> list[FileDiffText]:
        files: list[FileDiffText] = []
        block: list[str] = []

        for line in diff_output.split("\n"):
            if line.startswith("diff --git ") and block:
                file_diff = cls._parse_file_block(block)
                if file_diff is not None:
                    files.append(file_diff)
                block = []
            block.append(line)

        if block:
            file_diff = cls._parse_file_block(block)
            if file_diff is not None:
                files.append(file_diff)

        return files

    @classmethod
    def _parse_file_block(cls, lines: list[str]) -> FileDiffText | None:
        """
        Reads the file header of one block. A rename block looks like:
        diff --git a/old_path b/new_path
        similarity index XX%
        rename from old_path
        rename to new_path
        --- a/old_path
        +++ b/new_path
        @@ ... @@
        """
        if not lines or not lines[0].startswith("diff --git "):
            return None

        old_path: str | None = None
        new_path: str | None = None
        is_binary = False
        is_deleted = False

        for line in lines[1:]:
            if line.startswith("@@"):
                break
            if line.startswith("rename from "):
                old_path = cls._unquote(line[len("rename from ") :])
            elif line.startswith("rename to "):
                new_path = cls._unquote(line[len("rename to ") :])
            elif line.startswith("Binary files "):
                is_binary = True
            elif line.startswith("deleted file mode"):
                is_deleted = True
            elif match := cls._OLD_PATH_RE.match(line):
                old_path = cls._strip_prefix(cls._unquote(match.group(1)), "a/")
            elif match := cls._NEW_PATH_RE.match(line):
                new_path = cls._strip_prefix(cls._unquote(match.group(1)), "b/")

        if old_path is None or new_path is None:
            # pure renames, mode changes and binaries carry no ---/+++ lines
            match = cls._A_B_PATHS_RE.match(lines[0])
            if match:
                old_path = old_path or match.group(1)
                new_path = new_path or match.group(2)

        is_deleted = is_deleted or new_path == "/dev/null"
        if old_path == "/dev/null":
            old_path = None

        file_path = old_path if is_deleted else new_path
        if not file_path:
            logger.debug(f"Could not determine path for diff block: {lines[0]!r}")
            return None

        raw_diff_text = "\n".join(lines).rstrip("\n") + "\n"
        return FileDiffText(
            file_path=file_path,
            raw_diff_text=raw_diff_text,
            old_path=old_path,
            is_deleted=is_deleted,
            is_binary=is_binary,
        )

    @staticmethod
    def _unquote(path: str) -> str:
        path = path.rstrip("\t")
        if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
            return path[1:-1]
        return path

    @staticmethod
    def _strip_prefix(path: str, prefix: str) -> str:
        if path != "/dev/null" and path.startswith(prefix):
            return path[len(prefix) :]
        return path
