import logging
import sys

# fmt: off
from QScriptAssist.line_editor import ScriptEditor
from QScriptAssist.behaviors.syntax_highlighting import SyntaxHighlighting
from QScriptAssist.behaviors.tab_completion import TabCompletion
from QScriptAssist.editor_options import EditorOptions
from QScriptAssist.function_library import FunctionLibraryTree
from QScriptAssist.syntax_definition import javascript_syntax
from QScriptAssist.hl_groups import FORMAT_SPECS, COLORS
from Qt.QtWidgets import QMainWindow, QApplication
from Qt.QtGui import QFont
# fmt: on

LIBRARY = [
    {"name": "print", "tooltip": "print(value)", "closer": "("},
    {
        "name": "meshDoc",
        "closer": ".",
        "children": [
            {"name": "current", "tooltip": "current() -> Mesh", "closer": "("},
            {"name": "setCurrent", "tooltip": "setCurrent(id)", "closer": "("},
        ],
    },
    {
        "name": "Env",
        "closer": ".",
        "children": [
            {"name": "Rotate", "tooltip": "Rotate(angle, axis)", "closer": "("},
            {"name": "Rename", "tooltip": "Rename(name)", "closer": "("},
            {"name": "Scale", "tooltip": "Scale(factor)", "closer": "("},
        ],
    },
]

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

app = QApplication(sys.argv)
win = QMainWindow()

options = EditorOptions(
    {
        "syntax": javascript_syntax(),
        "library": FunctionLibraryTree.from_dict(LIBRARY),
        "formats": FORMAT_SPECS,
        "colors": COLORS,
        "font": QFont("Courier New", pointSize=10),
    }
)

edit = ScriptEditor(options, parent=win)
edit.addBehavior(SyntaxHighlighting)
edit.addBehavior(TabCompletion)

win.setCentralWidget(edit)
win.show()

app.exec()
