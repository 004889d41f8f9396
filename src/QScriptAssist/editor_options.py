from Qt.QtCore import QObject, Signal
from typing import Optional, Any

from .hl_groups import COLORS, FORMAT_SPECS

DEFAULT_OPTIONS: dict[str, Any] = {
    "syntax": None,  # SyntaxDefinition or a dict for SyntaxDefinition.from_dict
    "library": None,  # FunctionLibraryTree, a nested list of dicts, or a json path
    "formats": FORMAT_SPECS,
    "colors": COLORS,
    "popup_min_width": 200,
    "popup_max_width": 500,
    "popup_max_height": 300,
}


class EditorOptions(QObject):
    optionsUpdated = Signal(list)  # list of str

    def __init__(self, opts: Optional[dict[str, Any]] = None):
        super().__init__()
        self._options: dict[str, Any] = dict(DEFAULT_OPTIONS)
        if opts is not None:
            self._options.update(opts)

    def __getitem__(self, key: str):
        return self._options[key]

    def __setitem__(self, key: str, value):
        self._options[key] = value
        self.optionsUpdated.emit([key])

    def __contains__(self, key: str) -> bool:
        return key in self._options

    def update(self, opts: dict[str, Any]):
        self._options.update(opts)
        self.optionsUpdated.emit(list(opts.keys()))

    def get(self, key, default=None) -> Any:
        return self._options.get(key, default)

    def keys(self):
        return self._options.keys()
