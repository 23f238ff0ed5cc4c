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

from tree_sitter import Node, Query, QueryCursor, QueryError
from tree_sitter_language_pack import get_language

from ..data.syntax_unit import UnitKind
from ..exceptions import ConfigurationError
from .grammar_registry import LanguageGrammar


class QueryManager:
    """
    Compiles and runs the declaration queries of each grammar, using the
    QueryCursor(query) constructor and cursor.captures(node).
    """

    def __init__(self):
        # compiled queries per language, cursors hold match state so they are
        # created per run
        self._query_cache: dict[str, Query] = {}

    def run_declaration_query(
        self, grammar: LanguageGrammar, tree_root: Node
    ) -> dict[UnitKind, list[Node]]:
        """
        Returns the captured declaration nodes keyed by capture name, which is
        the unit kind they were listed under in the language config.
        """
        query_src = grammar.get_declaration_source()
        if not query_src.strip():
            return {}

        key = grammar.language_name
        if key not in self._query_cache:
            language = get_language(grammar.language_name)
            try:
                self._query_cache[key] = Query(language, query_src)
            except QueryError as e:
                raise ConfigurationError(
                    f"Invalid declaration queries for {key}", str(e)
                ) from e

        cursor = QueryCursor(self._query_cache[key])
        return cursor.captures(tree_root)
