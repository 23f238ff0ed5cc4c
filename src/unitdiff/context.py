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
from pathlib import Path
from typing import Annotated, Literal

from loguru import logger
from pydantic import Field

from unitdiff.constants import ENV_APP_PREFIX, GLOBAL_CONFIG_FILE, LOCAL_CONFIG_FILE
from unitdiff.core.config.config_loader import ConfigLoader
from unitdiff.core.extractor.unit_extractor import UnitExtractor
from unitdiff.core.git_commands.git_commands import GitCommands
from unitdiff.core.git_interface.interface import GitInterface
from unitdiff.core.git_interface.SubprocessGitInterface import (
    SubprocessGitInterface,
)
from unitdiff.core.syntax.file_parser import FileParser
from unitdiff.core.syntax.grammar_registry import GrammarRegistry
from unitdiff.core.syntax.protocol import SyntaxTreeProvider


@dataclass
class ExtractionConfig:
    fetch_remote: bool = True
    raw_fallback: bool = False
    strict_syntax: bool = True
    range_policy: Literal["closed", "body"] = "closed"
    max_workers: Annotated[int, Field(ge=1)] = 1
    verbose: bool = False
    silent: bool = False

    descriptions = {
        "fetch_remote": "Run git fetch before resolving revisions",
        "raw_fallback": "Forward the raw added lines of files without a grammar",
        "strict_syntax": "Treat files with syntax errors as unparsable",
        "range_policy": "closed: a change on any line of a declaration touches it, body: ignore its first and last line",
        "max_workers": "Number of files processed in parallel",
        "verbose": "Enable verbose logging output",
        "silent": "Do not output any log text to the console",
    }


@dataclass(frozen=True)
class ReviewContext:
    repo_path: Path
    git_interface: GitInterface
    git_commands: GitCommands
    file_parser: SyntaxTreeProvider
    unit_extractor: UnitExtractor
    config: ExtractionConfig

    @classmethod
    def from_config(
        cls,
        config: ExtractionConfig,
        repo_path: Path,
        registry: GrammarRegistry | None = None,
    ):
        git_interface = SubprocessGitInterface(repo_path)
        git_commands = GitCommands(git_interface)
        file_parser = FileParser(registry, strict=config.strict_syntax)
        unit_extractor = UnitExtractor(config.range_policy)

        return ReviewContext(
            repo_path,
            git_interface,
            git_commands,
            file_parser,
            unit_extractor,
            config,
        )


def load_extraction_config(
    input_args: dict | None = None,
    custom_config_path: Path | None = None,
) -> ExtractionConfig:
    """
    Builds the config from explicit arguments, an optional custom TOML file,
    the local and global unitdiffconfig.toml and UNITDIFF_ environment
    variables, in that order of priority.
    """
    # arguments left as None fall through to the other sources
    config_args = {
        key: value for key, value in (input_args or {}).items() if value is not None
    }

    config, used_configs, used_defaults = ConfigLoader.get_full_config(
        ExtractionConfig,
        config_args,
        LOCAL_CONFIG_FILE,
        ENV_APP_PREFIX,
        GLOBAL_CONFIG_FILE,
        custom_config_path,
    )

    logger.debug(f"Used {used_configs} to build config, defaults={used_defaults}")
    return config
