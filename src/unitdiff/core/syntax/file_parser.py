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

from loguru import logger
from tree_sitter import Node
from tree_sitter_language_pack import get_parser

from ..data.syntax_unit import KIND_ORDER, SyntaxUnit
from ..exceptions import unparsable_source
from .grammar_registry import GrammarRegistry, LanguageGrammar
from .query_manager import QueryManager


@dataclass(frozen=True)
class ParsedFile:
    """Contains the parsed AST root and detected language for a file."""

    content_bytes: bytes
    root_node: Node
    detected_language: str


class FileParser:
    """Parses files using Tree-sitter and lists their declarations."""

    def __init__(
        self,
        registry: GrammarRegistry | None = None,
        query_manager: QueryManager | None = None,
        strict: bool = True,
    ):
        self.registry = registry or GrammarRegistry.default()
        self.query_manager = query_manager or QueryManager()
        self.strict = strict

    def supports(self, file_path: str, file_content: str | None = None) -> bool:
        return self.registry.grammar_for(file_path, file_content) is not None

    def parse_file(self, file_path: str, file_content: str) -> ParsedFile:
        """
        Parse a file by detecting its language and creating an AST.

        Args:
            file_path: Path of the file (used for language detection)
            file_content: Content of the file to parse

        Returns:
            ParsedFile containing the root node and detected language

        Raises:
            UnparsableSourceError: no grammar, no parser, or (when strict) a
                tree containing syntax errors
        """
        grammar = self.registry.grammar_for(file_path, file_content)
        if grammar is None:
            raise unparsable_source(file_path, "No grammar registered for file type")

        try:
            parser = get_parser(grammar.language_name)
        except Exception as e:
            logger.debug(f"Failed to get parser for {grammar.language_name}: {e}")
            raise unparsable_source(
                file_path, f"No parser available for {grammar.language_name}"
            ) from e

        content_bytes = file_content.encode("utf8")
        tree = parser.parse(content_bytes)
        root_node = tree.root_node

        if root_node.has_error:
            error_line = self._first_error_line(root_node)
            if self.strict:
                raise unparsable_source(
                    file_path, f"Syntax error near line {error_line}"
                )
            logger.warning(
                f"Syntax error near line {error_line} in {file_path}, "
                "extracting from a partial tree"
            )

        return ParsedFile(
            content_bytes=content_bytes,
            root_node=root_node,
            detected_language=grammar.language_name,
        )

    def parse_source(self, file_path: str, file_content: str) -> list[SyntaxUnit]:
        parsed_file = self.parse_file(file_path, file_content)
        grammar = self.registry.get(parsed_file.detected_language)
        return self._collect_units(grammar, parsed_file)

    def _collect_units(
        self, grammar: LanguageGrammar, parsed_file: ParsedFile
    ) -> list[SyntaxUnit]:
        captures = self.query_manager.run_declaration_query(
            grammar, parsed_file.root_node
        )

        units: list[SyntaxUnit] = []
        seen: set[tuple[str, int, int]] = set()

        # grouped by kind, declaration order inside each kind
        for kind in KIND_ORDER:
            nodes = sorted(captures.get(kind, []), key=lambda n: n.start_byte)
            spans = {(node.start_byte, node.end_byte) for node in nodes}
            for node in nodes:
                key = (kind, node.start_byte, node.end_byte)
                if key in seen or self._wrapped_by(node, spans):
                    continue
                seen.add(key)

                start_line, end_line = self._line_range(node)
                units.append(
                    SyntaxUnit(
                        kind=kind,
                        start_line=start_line,
                        end_line=end_line,
                        source_text=self._node_text(parsed_file.content_bytes, node),
                        name=(
                            self._node_name(parsed_file.content_bytes, node)
                            if kind == "callable"
                            else None
                        ),
                    )
                )

        logger.debug(
            f"Found {len(units)} declarations in {parsed_file.detected_language} file"
        )
        return units

    @staticmethod
    def _line_range(node: Node) -> tuple[int, int]:
        """1-based inclusive line range of a node."""
        start_row = node.start_point[0]
        end_row, end_col = node.end_point
        # a node ending at column 0 stops before that line
        if end_col == 0 and end_row > start_row:
            end_row -= 1
        return start_row + 1, end_row + 1

    @staticmethod
    def _node_text(content_bytes: bytes, node: Node) -> str:
        return content_bytes[node.start_byte : node.end_byte].decode(
            "utf8", errors="replace"
        )

    @staticmethod
    def _wrapped_by(node: Node, spans: set[tuple[int, int]]) -> bool:
        """
        Whether the node's parent was captured under the same kind, as with a
        python function inside its decorated_definition.
        """
        parent = node.parent
        return parent is not None and (parent.start_byte, parent.end_byte) in spans

    @staticmethod
    def _node_name(content_bytes: bytes, node: Node) -> str | None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            # decorated_definition keeps the name on its wrapped definition
            definition = node.child_by_field_name("definition")
            if definition is not None:
                name_node = definition.child_by_field_name("name")
        if name_node is None:
            return None
        return FileParser._node_text(content_bytes, name_node)

    @staticmethod
    def _first_error_line(root_node: Node) -> int:
        stack = [root_node]
        while stack:
            node = stack.pop()
            if node.is_error or node.is_missing:
                return node.start_point[0] + 1
            # visit children in source order
            stack.extend(
                reversed([child for child in node.children if child.has_error])
            )
        return root_node.start_point[0] + 1
