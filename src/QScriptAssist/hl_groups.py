from .highlighter import KEYWORD, SYMBOL

# fmt: off
FORMAT_SPECS = {
    KEYWORD: {"color": "#00008B", "bold": True},
    SYMBOL: {"color": "#FF0000"},
}

COLORS = {
    "bg": "#FFFFFF",
    "fg": "#000000",
}
# fmt: on
