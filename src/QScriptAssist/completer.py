from __future__ import annotations
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol

from .function_library import (
    CLOSER_COLUMN,
    NAME_COLUMN,
    NOT_FOUND,
    ROOT,
    FunctionLibraryTree,
)
from .syntax_definition import SyntaxDefinition, scan

LEADING_TABS = re.compile(r"^\t+")


class TextHost(Protocol):
    """The part of the text engine the completer talks to"""

    def current_line(self) -> str: ...

    def cursor_column(self) -> int: ...

    def insert_text(self, text: str) -> None: ...

    def word_under_cursor(self) -> str: ...


class EditKey(Enum):
    RETURN = "return"
    ENTER = "enter"
    TAB = "tab"
    UP = "up"
    DOWN = "down"
    ESCAPE = "escape"
    MOVE = "move"  # cursor movement and backspace
    OTHER = "other"


class CompletionMode(Enum):
    IDLE = "idle"
    SHOWING = "showing"
    ACCEPTING = "accepting"


@dataclass(frozen=True)
class Candidate:
    """A library node offered for completion"""

    node: int
    path: str  # Fully qualified, eg "Env.mesh.Rotate"
    name: str
    tooltip: str = ""
    closer: str = ""

    def display(self) -> str:
        return self.path


@dataclass
class CompletionState:
    prefix: str = ""
    candidates: list[Candidate] = field(default_factory=list)
    row: int = 0
    mode: CompletionMode = CompletionMode.IDLE

    @property
    def current(self) -> Optional[Candidate]:
        if not 0 <= self.row < len(self.candidates):
            return None
        return self.candidates[self.row]

    @property
    def showing(self) -> bool:
        return self.mode is CompletionMode.SHOWING


class Completer:
    """Prefix completion against the function library

    The completer keeps a CompletionState and moves it between IDLE and
    SHOWING as text is typed. Accepting a candidate passes through the
    ACCEPTING mode while the suffix is inserted, then drops back to IDLE.
    """

    def __init__(self, syntax: SyntaxDefinition, library: FunctionLibraryTree):
        self.syntax = syntax
        self.library = library
        self.state = CompletionState()
        self._candidates: Optional[list[Candidate]] = None
        self._candidates_version = library.version

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def path_from_index(self, index: int) -> str:
        """Build the joined qualified name of a node

        Every ancestor above the node contributes its name followed by its
        closer, or by the joiner when it doesn't have one.
        ``split_path`` reads an unclosed open paren closer as a separator, so
        the path resolves back to the node when sibling names are unique.
        """
        parts = []
        current = index
        while current != NOT_FOUND and not self.library.is_root(current):
            part = self.library.data(current, NAME_COLUMN) or ""
            if current != index:
                part += self.library.data(current, CLOSER_COLUMN) or self.syntax.joiner
            parts.append(part)
            current = self.library.parent(current)
        return "".join(reversed(parts))

    def split_path(self, path: str) -> list[str]:
        """Split a qualified name into its names, ignoring call arguments"""
        return self.syntax.split_path(path)

    def resolve_path(self, path: str) -> int:
        """Find the node a qualified name refers to"""
        if not path:
            return ROOT
        return self.library.find(self.split_path(path))

    # ------------------------------------------------------------------
    # Candidates
    # ------------------------------------------------------------------

    def candidates(self) -> list[Candidate]:
        """Every symbol in the library, depth first in sibling order"""
        if self._candidates_version != self.library.version:
            self._candidates = None
            self._candidates_version = self.library.version
        if self._candidates is None:
            self._candidates = []
            for index in self.library.walk(ROOT):
                node = self.library.node(index)
                self._candidates.append(
                    Candidate(
                        node=index,
                        path=self.path_from_index(index),
                        name=node.name,
                        tooltip=node.tooltip,
                        closer=node.closer,
                    )
                )
        return self._candidates

    def filter(self, prefix: str) -> list[Candidate]:
        out = []
        for cand in self.candidates():
            segments = self.split_path(cand.path)
            if segments and segments[-1].startswith(prefix):
                out.append(cand)
        return out

    def word_under_cursor(self, line: str, column: int, fallback: str = "") -> str:
        """Get the identifier being typed at the column

        This is the last identifier in the line up to the column. When the
        line has no identifier at all, use the fallback instead.
        """
        line = line[:column]
        last = None
        for match in scan(self.syntax.next_identifier, line):
            last = match
        if last is None:
            return fallback
        return last.group(0)

    def last_inserted_word(self, line: str) -> str:
        words = self.syntax.split_words(line)
        if not words:
            return ""
        return words[-1]

    def insertion_text(self, candidate: Candidate, prefix: str) -> str:
        """Get the text to insert after the already typed prefix

        Top level symbols complete to their full path. A member can't
        complete to its full path from a bare prefix, so only its own name
        is used.
        """
        text = candidate.path
        if not text.startswith(prefix):
            text = candidate.name
        extra = len(text) - len(prefix)
        if extra <= 0:
            return ""
        return text[-extra:]

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def update(self, line: str, column: int, fallback: str = "") -> CompletionState:
        """Recompute the prefix and the candidates for the cursor position"""
        prefix = self.word_under_cursor(line, column, fallback)
        candidates = self.filter(prefix) if prefix else []
        if candidates:
            self.state = CompletionState(prefix, candidates, 0, CompletionMode.SHOWING)
        else:
            self.state = CompletionState(prefix)
        return self.state

    def hide(self):
        self.state = CompletionState()

    def move(self, offset: int):
        """Move the highlighted row, wrapping around the list"""
        count = len(self.state.candidates)
        if not self.state.showing or count == 0:
            return
        self.state.row = (self.state.row + offset) % count

    def select(self, row: int):
        if 0 <= row < len(self.state.candidates):
            self.state.row = row

    def accept(self, host: TextHost) -> str:
        """Insert the rest of the highlighted candidate and hide"""
        cand = self.state.current
        if cand is None:
            self.hide()
            return ""
        self.state.mode = CompletionMode.ACCEPTING
        text = self.insertion_text(cand, self.state.prefix)
        if text:
            host.insert_text(text)
        self.hide()
        return text

    def handle_insert(self, text: str, host: TextHost) -> bool:
        """React to text typed into the host

        Returns whether the popup should be showing afterwards
        """
        if not text:
            # Bare modifier presses produce no text
            return self.state.showing
        if self.syntax.is_delimiter(text):
            self.hide()
            return False
        state = self.update(
            host.current_line(), host.cursor_column(), host.word_under_cursor()
        )
        return state.showing

    def handle_key(self, key: EditKey, host: TextHost) -> bool:
        """Handle the keys completion cares about

        Returns whether the key was consumed
        """
        showing = self.state.showing
        if key in (EditKey.RETURN, EditKey.ENTER):
            if showing:
                self.accept(host)
                return True
            tabs = LEADING_TABS.match(host.current_line())
            host.insert_text("\n" + (tabs.group(0) if tabs else ""))
            return True

        if not showing:
            return False

        if key is EditKey.TAB:
            self.accept(host)
            return True
        if key is EditKey.UP:
            self.move(-1)
            return True
        if key is EditKey.DOWN:
            self.move(1)
            return True
        if key is EditKey.ESCAPE:
            self.hide()
            return True
        if key is EditKey.MOVE:
            # The prefix no longer matches the cursor, let the host move it
            self.hide()
        return False
