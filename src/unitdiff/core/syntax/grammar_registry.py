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
from dataclasses import dataclass
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import PurePosixPath

from loguru import logger
from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

from ..data.syntax_unit import KIND_ORDER, UnitKind
from ..exceptions import invalid_language_config


@dataclass(frozen=True)
class LanguageGrammar:
    """A tree-sitter language together with its declaration queries."""

    language_name: str
    extensions: tuple[str, ...]
    declaration_queries: dict[UnitKind, tuple[str, ...]]

    @classmethod
    def from_json_dict(cls, name: str, json_dict: dict) -> "LanguageGrammar":
        extensions = tuple(ext.lower() for ext in json_dict.get("extensions", []))
        raw_queries = json_dict.get("declaration_queries", {})

        declaration_queries: dict[UnitKind, tuple[str, ...]] = {}
        for kind in KIND_ORDER:
            queries = raw_queries.get(kind, [])
            if not isinstance(queries, list):
                raise ValueError(f"Invalid {kind} queries for {name}")
            for query in queries:
                # the capture name is what tells us the kind of a matched node
                if f"@{kind}" not in query:
                    raise ValueError(f"Query for {name} does not capture @{kind}")
            declaration_queries[kind] = tuple(queries)

        return cls(name, extensions, declaration_queries)

    def get_declaration_source(self) -> str:
        return "\n".join(
            query for kind in KIND_ORDER for query in self.declaration_queries[kind]
        )


class GrammarRegistry:
    """Maps file types to the grammars able to parse them."""

    def __init__(self, grammars: dict[str, LanguageGrammar]):
        self.grammars = grammars
        self._by_extension: dict[str, LanguageGrammar] = {}
        for grammar in grammars.values():
            for ext in grammar.extensions:
                self._by_extension[ext] = grammar

    @classmethod
    def default(cls) -> "GrammarRegistry":
        return cls.from_config(files("unitdiff") / "resources" / "language_config.json")

    @classmethod
    def from_config(cls, language_config_path: Traversable) -> "GrammarRegistry":
        try:
            with language_config_path.open("r", encoding="utf-8") as fh:
                config = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            raise invalid_language_config(str(language_config_path)) from e

        try:
            grammars = {
                name: LanguageGrammar.from_json_dict(name, language_config)
                for name, language_config in config.items()
            }
        except ValueError as e:
            error = invalid_language_config(str(language_config_path))
            error.details = str(e)
            raise error from e

        logger.debug(f"Loaded grammars: {sorted(grammars)}")
        return cls(grammars)

    @property
    def languages(self) -> list[str]:
        return list(self.grammars)

    def get(self, language_name: str) -> LanguageGrammar | None:
        return self.grammars.get(language_name)

    def grammar_for(
        self, file_path: str, file_content: str | None = None
    ) -> LanguageGrammar | None:
        """
        Find the grammar for a file, by extension first and then by asking
        pygments which language the file name (and content) looks like.
        """
        ext = PurePosixPath(file_path.replace("\\", "/")).suffix.lower()
        grammar = self._by_extension.get(ext)
        if grammar is not None:
            return grammar

        return self._detect_with_pygments(file_path, file_content)

    def supports(self, file_path: str) -> bool:
        return self.grammar_for(file_path) is not None

    def _detect_with_pygments(
        self, file_path: str, file_content: str | None
    ) -> LanguageGrammar | None:
        try:
            lexer = get_lexer_for_filename(file_path, code=file_content)
        except ClassNotFound:
            return None

        for alias in (lexer.name.lower(), *lexer.aliases):
            if alias in self.grammars:
                logger.debug(f"Detected {alias} for {file_path} using pygments")
                return self.grammars[alias]
        return None
