from __future__ import annotations

from . import Behavior
from typing import TYPE_CHECKING, Optional, Any
from Qt.QtGui import QSyntaxHighlighter, QTextCharFormat, QColor, QFont, QTextDocument

from ..utils import to_utf16_range

if TYPE_CHECKING:
    from ..session import EditingSession
    from ..line_editor import ScriptEditor


def compile_formats(format_specs: dict[str, dict[str, Any]]) -> dict[str, QTextCharFormat]:
    """Convert user style specs -> QTextCharFormat instances."""
    out = {}

    for name, spec in format_specs.items():
        fmt = QTextCharFormat()
        if "color" in spec:
            fmt.setForeground(QColor(spec["color"]))
        if spec.get("bold"):
            fmt.setFontWeight(QFont.Weight.Bold)
        if spec.get("italic"):
            fmt.setFontItalic(True)
        out[name] = fmt

    return out


class ScriptHighlighter(QSyntaxHighlighter):
    """Paint the keyword and library symbol spans of each block"""

    def __init__(
        self,
        document: QTextDocument,
        session: EditingSession,
        format_specs: dict[str, dict[str, Any]],
    ):
        super().__init__(document)
        self.session = session
        self.formats = compile_formats(format_specs)

    def highlightBlock(self, text: str):
        # Blocks never depend on each other
        self.setCurrentBlockState(0)
        for span in self.session.highlight(text):
            fmt = self.formats.get(span.tag)
            if fmt is None:
                continue
            start, length = to_utf16_range(text, span.start, span.length)
            if length > 0:
                self.setFormat(start, length, fmt)


class SyntaxHighlighting(Behavior):
    def __init__(self, editor: ScriptEditor):
        super().__init__(editor)
        self.setListen({"formats"})
        self._formats: dict[str, dict[str, Any]] = {}
        self.highlighter: Optional[ScriptHighlighter] = None
        self.editor.sessionChanged.connect(self.rebuild)
        self.updateAll()

    @property
    def formats(self):
        return self._formats

    @formats.setter
    def formats(self, value):
        self._formats = value or {}
        self.rebuild()

    def rebuild(self):
        """Replace the highlighter with one built on the editor's session"""
        self._detach()
        self.highlighter = ScriptHighlighter(
            self.editor.document(), self.editor.session, self._formats
        )

    def _detach(self):
        if self.highlighter is not None:
            # Clears the formats this highlighter painted
            self.highlighter.setDocument(None)
            self.highlighter = None

    def remove(self):
        super().remove()
        self.editor.sessionChanged.disconnect(self.rebuild)
        self._detach()
