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

from unittest.mock import Mock

from unitdiff.core.file_reader.git_file_reader import GitFileReader
from unitdiff.core.git_commands.git_commands import GitCommands


def test_read_uses_reader_revision():
    mock_git = Mock(spec=GitCommands)
    mock_git.show_file.return_value = "new content"

    reader = GitFileReader(mock_git, "new_sha")

    assert reader.read("src/app.py") == "new content"
    mock_git.show_file.assert_called_once_with("new_sha", "src/app.py")


def test_read_missing_file():
    mock_git = Mock(spec=GitCommands)
    mock_git.show_file.return_value = None

    reader = GitFileReader(mock_git, "new_sha")

    assert reader.read("gone.py") is None
