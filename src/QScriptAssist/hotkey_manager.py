from __future__ import annotations
from typing import Optional, Union

from Qt.QtCore import Qt
from Qt.QtGui import QKeyEvent, QKeySequence
from Qt import QtCompat

from .completer import EditKey

EDIT_KEYS = {
    Qt.Key.Key_Return: EditKey.RETURN,
    Qt.Key.Key_Enter: EditKey.ENTER,
    Qt.Key.Key_Tab: EditKey.TAB,
    Qt.Key.Key_Up: EditKey.UP,
    Qt.Key.Key_Down: EditKey.DOWN,
    Qt.Key.Key_Escape: EditKey.ESCAPE,
}

# These move the cursor away from the prefix, modified or not
MOVE_KEYS = {
    Qt.Key.Key_Left,
    Qt.Key.Key_Right,
    Qt.Key.Key_Home,
    Qt.Key.Key_End,
    Qt.Key.Key_PageUp,
    Qt.Key.Key_PageDown,
    Qt.Key.Key_Backspace,
}


def hk(
    key: Union[Qt.Key, int],
    mods: Optional[Union[Qt.KeyboardModifier, Qt.KeyboardModifiers, int]] = None,
) -> str:
    """Build a hashable hotkey string"""
    # Ignore pure modifier presses
    # And handle the stupidity of backtab
    kd = {
        Qt.Key.Key_Shift: "Shift",
        Qt.Key.Key_Control: "Control",
        Qt.Key.Key_Alt: "Alt",
        Qt.Key.Key_Meta: "Meta",
        Qt.Key.Key_Backtab: "Shift+Tab",
    }
    single = kd.get(key)  # type: ignore
    if single is not None:
        return single

    seqval = QtCompat.enumValue(key)
    if mods is not None:
        seqval |= QtCompat.enumValue(mods)

    return QKeySequence(seqval).toString(QKeySequence.SequenceFormat.PortableText)


def edit_key(event: QKeyEvent) -> EditKey:
    """Map a key press onto the keys the completer handles

    Cursor movement counts with any modifiers. Otherwise only unmodified
    presses count, so shift+tab and friends pass through
    """
    if event.key() in MOVE_KEYS:
        return EditKey.MOVE
    mods = event.modifiers() & ~Qt.KeyboardModifier.KeypadModifier
    if QtCompat.enumValue(mods) != 0:
        return EditKey.OTHER
    return EDIT_KEYS.get(event.key(), EditKey.OTHER)
