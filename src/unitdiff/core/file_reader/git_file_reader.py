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

from ..git_commands.git_commands import GitCommands


class GitFileReader:
    def __init__(self, git_commands: GitCommands, revision: str):
        self.git_commands = git_commands
        self.revision = revision

    def read(self, path: str) -> str | None:
        """Returns the file content at the reader's revision using git cat-file."""
        return self.git_commands.show_file(self.revision, path)
