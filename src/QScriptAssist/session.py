from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from .completer import Completer
from .function_library import FunctionLibraryTree
from .highlighter import Highlighter, Span
from .syntax_definition import SyntaxDefinition, SyntaxDefinitionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditingSession:
    """One syntax, one library, and the highlighter and completer built on them

    Sessions are never changed in place. Swapping the syntax or the library
    builds a new session, and the editor replaces its reference to it.
    A session without a syntax is inert: it highlights and completes nothing.
    """

    syntax: Optional[SyntaxDefinition]
    library: FunctionLibraryTree
    highlighter: Optional[Highlighter]
    completer: Optional[Completer]

    @classmethod
    def create(
        cls,
        syntax: Optional[SyntaxDefinition],
        library: Optional[FunctionLibraryTree] = None,
    ) -> EditingSession:
        if library is None:
            library = FunctionLibraryTree()
        if syntax is None:
            return cls(None, library, None, None)
        return cls(syntax, library, Highlighter(syntax, library), Completer(syntax, library))

    @classmethod
    def inert(cls) -> EditingSession:
        return cls.create(None)

    @classmethod
    def from_config(
        cls,
        syntax: Union[SyntaxDefinition, dict[str, Any], None],
        library: Union[FunctionLibraryTree, list[dict[str, Any]], None] = None,
    ) -> EditingSession:
        """Build a session from config data, degrading instead of failing

        A syntax that can't be compiled or a library that can't be read give
        an inert session or an empty library, and a logged warning.
        """
        if isinstance(syntax, dict):
            try:
                syntax = SyntaxDefinition.from_dict(syntax)
            except SyntaxDefinitionError as err:
                logger.warning("Ignoring malformed syntax definition: %s", err)
                syntax = None
        elif syntax is not None and not isinstance(syntax, SyntaxDefinition):
            logger.warning("Ignoring syntax definition of type %s", type(syntax).__name__)
            syntax = None

        if isinstance(library, list):
            try:
                library = FunctionLibraryTree.from_dict(library)
            except (KeyError, TypeError, ValueError, AttributeError) as err:
                logger.warning("Ignoring malformed function library: %s", err)
                library = None
        elif library is not None and not isinstance(library, FunctionLibraryTree):
            logger.warning("Ignoring function library of type %s", type(library).__name__)
            library = None

        return cls.create(syntax, library)

    @property
    def is_inert(self) -> bool:
        return self.syntax is None

    def with_syntax(self, syntax: Optional[SyntaxDefinition]) -> EditingSession:
        logger.debug("Rebuilding the editing session for a new syntax")
        return self.create(syntax, self.library)

    def with_library(self, library: FunctionLibraryTree) -> EditingSession:
        logger.debug("Rebuilding the editing session for a new library")
        return self.create(self.syntax, library)

    def highlight(self, text: str) -> list[Span]:
        if self.highlighter is None:
            return []
        return self.highlighter.highlight_block(text)
