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

from pathlib import Path

from loguru import logger

from unitdiff.context import ReviewContext, load_extraction_config
from unitdiff.core.data.code_block import ReviewPayload
from unitdiff.core.exceptions import not_git_repository
from unitdiff.core.logging.logging import setup_logger
from unitdiff.pipelines.review_pipeline import ReviewPipeline


def review_changes(
    base_rev: str,
    new_rev: str,
    repo_path: str | Path = ".",
    custom_config_path: Path | None = None,
    **config_args,
) -> ReviewPayload:
    """
    Extract the declarations touched between two revisions of a repository.

    Args:
        base_rev: Revision the change is compared against, e.g. "origin/main"
        new_rev: Revision holding the change
        repo_path: Path of the git working tree
        custom_config_path: Optional TOML file overriding the local and global
            unitdiffconfig.toml
        **config_args: ExtractionConfig fields, taking priority over every
            other config source

    Raises:
        GitError: repo_path is not a git repository or a revision is unknown
        ConfigurationError: the merged configuration is invalid
    """
    config = load_extraction_config(config_args, custom_config_path)

    setup_logger("review", debug=config.verbose, silent=config.silent)

    context = ReviewContext.from_config(config, Path(repo_path))
    # fail immediately if we arent in a valid git repo
    if not context.git_commands.is_git_repository():
        raise not_git_repository(str(repo_path))

    logger.debug(f"Reviewing {base_rev}..{new_rev} in {context.repo_path}")
    return ReviewPipeline(context).run(base_rev, new_rev)
