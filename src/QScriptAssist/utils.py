from __future__ import annotations
import re
from typing import Collection

from .constants import ENC


def len16(val: str) -> int:
    """Get the number of utf16 code points where surrogate pairs count as 2"""
    return len(val.encode(ENC)) // 2


def to_utf16_range(text: str, start: int, length: int) -> tuple[int, int]:
    """Convert a python string range of a line to a Qt (utf16) range"""
    if text.isascii():
        return start, length
    start16 = len16(text[:start])
    return start16, len16(text[start : start + length])


def unique_default_name(basename: str, names: Collection[str]) -> str:
    """Get a ``basename_N`` name that isn't in names

    N is one more than the largest number already used with this basename,
    or the number of names when the basename hasn't been used yet.
    """
    numbered = re.compile(re.escape(basename) + r"_(\d+)$")
    used = [int(m.group(1)) for m in map(numbered.match, names) if m]
    if not used:
        return f"{basename}_{len(names)}"
    return f"{basename}_{max(used) + 1}"


def function_name(text: str) -> str:
    """Turn a free text label into a camelCase function name

    "Remove duplicated vertices" -> "removeDuplicatedVertices"
    """
    words = re.findall(r"\w+", text)
    if not words:
        return ""
    name = "".join(w[0].upper() + w[1:] for w in words)
    if text[0].isalpha():
        name = name[0].lower() + name[1:]
    return name


def dedupe_name(name: str, names: Collection[str]) -> str:
    """Append a numeric suffix to name until it doesn't collide with names"""
    candidate = name
    count = 1
    while candidate in names:
        candidate = f"{name}_{count}"
        count += 1
    return candidate


def from_utf16_offset(text: str, offset16: int) -> int:
    """Convert a Qt (utf16) offset into a line to a python string index"""
    if text.isascii():
        return offset16
    head = text.encode(ENC)[: offset16 * 2]
    return len(head.decode(ENC, errors="ignore"))
