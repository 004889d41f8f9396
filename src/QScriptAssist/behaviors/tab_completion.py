from __future__ import annotations
from Qt.QtCore import Qt
from Qt.QtGui import QKeyEvent
from Qt.QtWidgets import QListWidget, QListWidgetItem, QAbstractItemView
from typing import Optional, TYPE_CHECKING
from . import Behavior, HasKeyPress, HasTextTyped
from ..completer import Candidate, Completer, CompletionState, EditKey
from ..hotkey_manager import edit_key

if TYPE_CHECKING:
    from ..line_editor import ScriptEditor


class CompletionPopup(QListWidget):
    """Popup widget showing completion suggestions"""

    def __init__(self, parent: ScriptEditor):
        super().__init__(parent)
        self.editor = parent

        # Use Qt.Tool instead of Qt.Popup to allow editor to continue receiving events
        self.setWindowFlags(
            Qt.WindowType.Tool
            | Qt.WindowType.FramelessWindowHint
            | Qt.WindowType.WindowStaysOnTopHint
        )
        self.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating)
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        self.setVerticalScrollMode(QAbstractItemView.ScrollMode.ScrollPerPixel)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)

        self.min_width = 200
        self.max_width = 500
        self.max_height = 300

    def show_state(self, state: CompletionState):
        """Mirror the completer's candidates and highlighted row"""
        self.clear()
        for cand in state.candidates:
            item = QListWidgetItem(cand.display())
            item.setData(Qt.ItemDataRole.UserRole, cand)
            if cand.tooltip:
                item.setToolTip(cand.tooltip)
            self.addItem(item)

        if self.count() == 0:
            self.hide()
            return
        self.setCurrentRow(state.row)
        self.scrollToItem(self.currentItem())
        self._position_at_cursor()
        self.show()

    def current_candidate(self) -> Optional[Candidate]:
        item = self.currentItem()
        if item is None:
            return None
        return item.data(Qt.ItemDataRole.UserRole)

    def _position_at_cursor(self):
        """Position the popup at the editor's cursor"""
        cursor_rect = self.editor.cursorRect(self.editor.textCursor())

        # Position below cursor line
        popup_pos = self.editor.viewport().mapToGlobal(cursor_rect.bottomLeft())

        # Size the width from the content
        max_width = self.min_width
        for i in range(min(self.count(), 20)):  # Check first 20 items
            item_width = self.fontMetrics().horizontalAdvance(self.item(i).text()) + 30
            max_width = max(max_width, item_width)
        scroll_width = self.verticalScrollBar().sizeHint().width()
        self.setFixedWidth(min(max_width + scroll_width, self.max_width))

        row_height = self.sizeHintForRow(0)
        self.setFixedHeight(min(self.count() * row_height + 4, self.max_height))

        # Show above the cursor when it doesn't fit below
        screen = self.editor.screen()
        if screen is not None:
            if popup_pos.y() + self.height() > screen.availableGeometry().bottom():
                popup_pos = self.editor.viewport().mapToGlobal(cursor_rect.topLeft())
                popup_pos.setY(popup_pos.y() - self.height())

        self.move(popup_pos)


class TabCompletion(HasKeyPress, HasTextTyped, Behavior):
    """Drive the session's completer from the editor and show its popup"""

    def __init__(self, editor: ScriptEditor):
        super().__init__(editor)
        self.setListen({"popup_min_width", "popup_max_width", "popup_max_height"})

        self.completion_popup: CompletionPopup = CompletionPopup(self.editor)
        self.completion_popup.itemClicked.connect(self.on_item_clicked)
        self.editor.sessionChanged.connect(self.on_session_changed)
        self.updateAll()

    def _popup_size(self, attr: str, value: int):
        setattr(self.completion_popup, attr, value)

    popup_min_width = property(None, lambda self, v: self._popup_size("min_width", v))
    popup_max_width = property(None, lambda self, v: self._popup_size("max_width", v))
    popup_max_height = property(None, lambda self, v: self._popup_size("max_height", v))

    @property
    def completer(self) -> Optional[Completer]:
        return self.editor.session.completer

    def sync_popup(self):
        completer = self.completer
        if completer is None or not completer.state.showing:
            self.completion_popup.hide()
            return
        self.completion_popup.show_state(completer.state)

    def on_session_changed(self):
        # The old completer and its state went away with the old session
        self.completion_popup.hide()

    def on_item_clicked(self, item: QListWidgetItem):
        completer = self.completer
        if completer is None:
            return
        completer.select(self.completion_popup.row(item))
        completer.accept(self.editor)
        self.sync_popup()

    def textTyped(self, text: str):
        completer = self.completer
        if completer is None:
            return
        completer.handle_insert(text, self.editor)
        self.sync_popup()

    def keyPressEvent(self, event: QKeyEvent, hotkey: str) -> bool:
        completer = self.completer
        if completer is None:
            return False

        key = edit_key(event)
        if key is EditKey.OTHER:
            return False

        consumed = completer.handle_key(key, self.editor)
        self.sync_popup()
        return consumed

    def remove(self):
        super().remove()
        self.editor.sessionChanged.disconnect(self.on_session_changed)
        self.completion_popup.hide()
        self.completion_popup.deleteLater()
