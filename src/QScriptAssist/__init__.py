from .syntax_definition import SyntaxDefinition, SyntaxDefinitionError, javascript_syntax
from .function_library import FunctionLibraryTree, FunctionLibraryNode, ROOT, NOT_FOUND
from .highlighter import Highlighter, HighlightRule, Span
from .completer import Candidate, Completer, CompletionMode, CompletionState, EditKey
from .session import EditingSession

__all__ = [
    "Candidate",
    "Completer",
    "CompletionMode",
    "CompletionState",
    "EditKey",
    "EditingSession",
    "FunctionLibraryNode",
    "FunctionLibraryTree",
    "HighlightRule",
    "Highlighter",
    "NOT_FOUND",
    "ROOT",
    "Span",
    "SyntaxDefinition",
    "SyntaxDefinitionError",
    "javascript_syntax",
]
