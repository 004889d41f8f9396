from QScriptAssist.function_library import FunctionLibraryTree

LIBRARY_DATA = [
    {
        "name": "Env",
        "closer": ".",
        "children": [
            {"name": "Rotate", "tooltip": "Rotate(angle, axis)", "closer": "("},
            {"name": "Scale", "tooltip": "Scale(factor)", "closer": "("},
        ],
    },
    {
        "name": "meshDoc",
        "closer": ".",
        "children": [
            {"name": "current", "tooltip": "current() -> Mesh", "closer": "("},
        ],
    },
    {"name": "Tools", "children": [{"name": "Smooth"}]},
]


def flat_library() -> FunctionLibraryTree:
    tree = FunctionLibraryTree()
    tree.add("Rotate", "Rotate(angle)", "(")
    tree.add("Rename", "Rename(name)", "(")
    tree.add("Scale", "Scale(factor)", "(")
    return tree


def nested_library() -> FunctionLibraryTree:
    return FunctionLibraryTree.from_dict(LIBRARY_DATA)


class FakeHost:
    """A single buffer text host with the cursor at pos"""

    def __init__(self, text: str = "", word: str = ""):
        self.text = text
        self.pos = len(text)
        self.word = word
        self.inserted: list[str] = []

    def _line_start(self) -> int:
        return self.text.rfind("\n", 0, self.pos) + 1

    def current_line(self) -> str:
        end = self.text.find("\n", self.pos)
        if end == -1:
            end = len(self.text)
        return self.text[self._line_start() : end]

    def cursor_column(self) -> int:
        return self.pos - self._line_start()

    def insert_text(self, text: str):
        self.inserted.append(text)
        self.text = self.text[: self.pos] + text + self.text[self.pos :]
        self.pos += len(text)

    def word_under_cursor(self) -> str:
        return self.word

    def type(self, completer, text: str) -> bool:
        self.insert_text(text)
        return completer.handle_insert(text, self)
