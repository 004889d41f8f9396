from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Optional, Collection, Type, TypeVar

from Qt.QtCore import Signal
from Qt.QtWidgets import QPlainTextEdit
from Qt.QtGui import QColor, QKeyEvent, QPalette, QTextCursor

from .behaviors import Behavior, HasKeyPress, HasTextTyped
from .editor_options import EditorOptions
from .function_library import FunctionLibraryTree
from .hotkey_manager import hk
from .session import EditingSession
from .syntax_definition import SyntaxDefinition
from .utils import from_utf16_offset

logger = logging.getLogger(__name__)

T_Behavior = TypeVar("T_Behavior", bound=Behavior)


class ScriptEditor(QPlainTextEdit):
    """A plain text editor hosting an EditingSession

    The editor is also the text host the completer reads the current line
    from and inserts completions into.
    """

    sessionChanged = Signal()

    def __init__(
        self,
        options: EditorOptions,
        parent=None,
    ):
        super().__init__(parent=parent)
        self.options = options
        self.session: EditingSession = EditingSession.inert()
        self._behaviors: list[Behavior] = []

        self.options.optionsUpdated.connect(self.updateOptions)
        self.updateOptions(list(self.options.keys()))

    def updateOptions(self, keylist: Collection[str]):
        keys = set(keylist)
        if "font" in keys:
            self.setFont(self.options["font"])
        if "colors" in keys:
            self.setColors(self.options["colors"])
        if keys & {"syntax", "library"}:
            library = self._loadLibrary(self.options.get("library"))
            self.setSession(EditingSession.from_config(self.options.get("syntax"), library))

    def _loadLibrary(self, value: Any):
        if isinstance(value, (str, Path)):
            return FunctionLibraryTree.from_json(value)
        return value

    def setColors(self, colors: dict[str, str]):
        palette = self.palette()
        palette.setColor(QPalette.ColorRole.Base, QColor(colors["bg"]))
        palette.setColor(QPalette.ColorRole.Window, QColor(colors["bg"]))
        palette.setColor(QPalette.ColorRole.Text, QColor(colors["fg"]))
        self.setPalette(palette)
        self.setAutoFillBackground(True)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def setSession(self, session: EditingSession):
        """Replace the editing session in one step"""
        if session.is_inert:
            logger.info("Script editor session is inert, showing plain text")
        self.session = session
        self.sessionChanged.emit()

    def setSyntax(self, syntax: Optional[SyntaxDefinition]):
        self.setSession(self.session.with_syntax(syntax))

    def setLibrary(self, library: FunctionLibraryTree):
        self.setSession(self.session.with_library(library))

    # ------------------------------------------------------------------
    # Behaviors
    # ------------------------------------------------------------------

    def addBehavior(
        self, behaviorCls: Type[T_Behavior]
    ) -> tuple[Optional[T_Behavior], T_Behavior]:
        """Set the given behavior to the class. If a behavior of the given type already exists, remove it
        Return both the old and newly instantiated behaviors.
        """
        old_bh = self.removeBehavior(behaviorCls)
        behavior = behaviorCls(self)
        self._behaviors.append(behavior)
        return old_bh, behavior

    def removeBehavior(self, behaviorCls: Type[T_Behavior]) -> Optional[T_Behavior]:
        """Remove all existing behaviors of the given type"""
        torem = [bh for bh in self._behaviors if type(bh) is behaviorCls]
        if not torem:
            return None
        self._behaviors = [bh for bh in self._behaviors if type(bh) is not behaviorCls]
        for rem in torem:
            rem.remove()
        if len(torem) > 1:
            logger.warning("Multiple behaviors of type %s were removed", behaviorCls.__name__)
        return torem[0]

    def getBehavior(self, behaviorCls: Type[T_Behavior]) -> Optional[T_Behavior]:
        for bh in self._behaviors:
            if type(bh) is behaviorCls:
                return bh
        return None

    # ------------------------------------------------------------------
    # Text host
    # ------------------------------------------------------------------

    def current_line(self) -> str:
        return self.textCursor().block().text()

    def cursor_column(self) -> int:
        cursor = self.textCursor()
        return from_utf16_offset(cursor.block().text(), cursor.positionInBlock())

    def insert_text(self, text: str):
        cursor = self.textCursor()
        cursor.insertText(text)
        self.setTextCursor(cursor)

    def word_under_cursor(self) -> str:
        cursor = self.textCursor()
        cursor.select(QTextCursor.SelectionType.WordUnderCursor)
        return cursor.selectedText()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def keyPressEvent(self, e: QKeyEvent):
        hotkey = hk(e.key(), e.modifiers())

        for behavior in self._behaviors:
            if not isinstance(behavior, HasKeyPress):
                continue
            if behavior.keyPressEvent(e, hotkey):
                return

        super().keyPressEvent(e)

        # Pure modifier presses and control keys produce no typed text
        text = e.text()
        if not text or not text.isprintable():
            return
        for behavior in self._behaviors:
            if isinstance(behavior, HasTextTyped):
                behavior.textTyped(text)
