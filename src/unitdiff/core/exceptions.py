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

"""
Custom exception hierarchy for unitdiff.

Errors carry a short message for the user and optional technical details
for the log file. Per-file extraction problems derive from ExtractionError
so a run can record them and carry on with the remaining files.
"""


class UnitDiffError(Exception):
    """
    Base exception for all unitdiff-related errors.

    All unitdiff-specific exceptions should inherit from this class
    to enable consistent error handling throughout the package.
    """

    def __init__(self, message: str, details: str | None = None):
        """
        Initialize a UnitDiffError.

        Args:
            message: Main error message for the user
            details: Additional technical details for logging
        """
        self.message = message
        self.details = details
        super().__init__(message)


class GitError(UnitDiffError):
    """
    Errors related to git operations.

    Raised when git commands fail or when git repository
    state is invalid for the requested operation.
    """

    pass


class RevisionNotFoundError(GitError):
    """Raised when a revision cannot be resolved to a commit."""

    pass


class ValidationError(UnitDiffError):
    """
    Input validation errors.

    Raised when input fails validation checks,
    such as empty revision names or invalid paths.
    """

    pass


class ConfigurationError(UnitDiffError):
    """
    Configuration-related errors.

    Raised when configuration files or the language config are invalid,
    or contain incompatible settings.
    """

    pass


class ExtractionError(UnitDiffError):
    """
    Errors that stop extraction for a single file.

    The pipeline records these as per-file failures instead of aborting.
    """

    def __init__(self, file_path: str, message: str, details: str | None = None):
        self.file_path = file_path
        super().__init__(message, details)


class UnparsableSourceError(ExtractionError):
    """Raised when a changed file cannot be parsed into a trustworthy tree."""

    pass


class SourceUnavailableError(ExtractionError):
    """Raised when the new revision of a changed file cannot be read."""

    pass


# Convenience functions for creating common errors
def git_not_found() -> GitError:
    """Create a GitError for when git is not available."""
    return GitError(
        "Git is not installed or not in PATH",
        "Please install git and ensure it's available in your PATH environment variable",
    )


def not_git_repository(path: str = ".") -> GitError:
    """Create a GitError for when not in a git repository."""
    return GitError(
        f"Not a git repository: {path}",
        "Navigate to an existing repository or pass its path explicitly",
    )


def revision_not_found(revision: str) -> RevisionNotFoundError:
    return RevisionNotFoundError(
        f"Unknown revision: {revision}",
        "Check the branch or commit name, remote branches need a fetch first",
    )


def unparsable_source(file_path: str, reason: str) -> UnparsableSourceError:
    return UnparsableSourceError(
        file_path,
        f"Failed to parse: {file_path}",
        reason,
    )


def source_unavailable(file_path: str, revision: str) -> SourceUnavailableError:
    return SourceUnavailableError(
        file_path,
        f"Could not read {file_path} at {revision}",
        "The file may be missing from the revision or not valid utf-8",
    )


def invalid_language_config(path: str) -> ConfigurationError:
    return ConfigurationError(
        f"Invalid language config: {path}",
        "Every query must capture its node with the kind it is listed under",
    )
