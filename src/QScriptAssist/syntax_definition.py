from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Optional


IDENTIFIER_PATTERN = r"[A-Za-z_]\w*"
DELIMITER_PATTERN = r"[\s.,;:(){}\[\]+\-*/%=<>!&|^~?'\"]"

# fmt: off
JAVASCRIPT_RESERVED = (
    "break", "case", "catch", "continue", "default", "delete", "do", "else",
    "finally", "for", "function", "if", "in", "instanceof", "new", "return",
    "switch", "this", "throw", "try", "typeof", "var", "void", "while", "with",
    "true", "false", "null", "undefined",
)
# fmt: on


class SyntaxDefinitionError(ValueError):
    """Raised when a syntax definition cannot be compiled"""


def word_bounded(word: str) -> str:
    return r"\b" + word + r"\b"


def scan(
    find: Callable[[str, int], Optional[re.Match]], text: str
) -> Iterator[re.Match]:
    """Yield the non-empty matches of a matcher from left to right

    Zero width matches are skipped, and the scan always moves forward
    """
    pos = 0
    while pos <= len(text):
        match = find(text, pos)
        if match is None:
            return
        if match.end() == match.start():
            pos = match.end() + 1
            continue
        yield match
        pos = match.end()


@dataclass(frozen=True)
class SyntaxDefinition:
    """The lexical rules of a scripting language

    All the matchers are stateless: they take the text and an offset and
    return the next ``re.Match`` or None.
    """

    reserved: frozenset[str] = frozenset()
    identifier: str = IDENTIFIER_PATTERN
    word_delimiter: str = DELIMITER_PATTERN
    open_paren: str = r"\("
    close_paren: str = r"\)"
    joiner: str = "."

    _reserved_re: Optional[re.Pattern] = field(init=False, repr=False, compare=False)
    _identifier_re: re.Pattern = field(init=False, repr=False, compare=False)
    _symbol_re: re.Pattern = field(init=False, repr=False, compare=False)
    _delimiter_re: re.Pattern = field(init=False, repr=False, compare=False)
    _paren_group_re: re.Pattern = field(init=False, repr=False, compare=False)
    _path_split_re: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        words = frozenset(w for w in self.reserved if w)
        object.__setattr__(self, "reserved", words)
        if not self.joiner:
            raise SyntaxDefinitionError("The path joiner can't be empty")

        alternation = "|".join(
            re.escape(w) for w in sorted(words, key=lambda w: (-len(w), w))
        )
        joiner = re.escape(self.joiner)
        try:
            reserved_re = None
            not_reserved = ""
            if alternation:
                reserved_re = re.compile(word_bounded(f"(?:{alternation})"))
                not_reserved = rf"(?!(?:{alternation})\b)"

            ident = f"(?:{self.identifier})"
            symbol = (
                rf"\b{not_reserved}{ident}"
                rf"(?:\s*{joiner}\s*{ident})*"
                rf"(?:\s*(?:{self.open_paren}))?"
            )
            compiled = {
                "_reserved_re": reserved_re,
                "_identifier_re": re.compile(ident),
                "_symbol_re": re.compile(symbol),
                "_delimiter_re": re.compile(self.word_delimiter),
                "_paren_group_re": re.compile(
                    rf"\s*(?:{self.open_paren}).*?(?:{self.close_paren})"
                ),
                "_path_split_re": re.compile(rf"{joiner}|(?:{self.open_paren})"),
            }
        except re.error as err:
            raise SyntaxDefinitionError(f"Invalid syntax pattern: {err}") from err

        checks = (
            ("_identifier_re", "identifier"),
            ("_delimiter_re", "word_delimiter"),
            ("_path_split_re", "open_paren"),
        )
        for key, label in checks:
            if compiled[key].match("") is not None:
                raise SyntaxDefinitionError(f"The {label} pattern can't match an empty string")

        for name, pattern in compiled.items():
            object.__setattr__(self, name, pattern)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SyntaxDefinition:
        """Build a definition from plain config data

        Recognized keys are ``reserved`` (a list of words) plus any of
        ``identifier``, ``word_delimiter``, ``open_paren``, ``close_paren``
        and ``joiner``. Missing keys keep their defaults.
        """
        if not isinstance(data, dict):
            raise SyntaxDefinitionError(
                f"Syntax definition must be a dict, not {type(data).__name__}"
            )

        kwargs: dict[str, Any] = {}
        reserved = data.get("reserved", ())
        if isinstance(reserved, str) or not isinstance(reserved, Iterable):
            raise SyntaxDefinitionError("'reserved' must be a list of words")
        words = list(reserved)
        if not all(isinstance(w, str) for w in words):
            raise SyntaxDefinitionError("'reserved' must only contain strings")
        kwargs["reserved"] = frozenset(words)

        for key in ("identifier", "word_delimiter", "open_paren", "close_paren", "joiner"):
            if key not in data:
                continue
            if not isinstance(data[key], str):
                raise SyntaxDefinitionError(f"{key!r} must be a string")
            kwargs[key] = data[key]
        unknown = set(data) - set(kwargs)
        if unknown:
            raise SyntaxDefinitionError(f"Unknown syntax keys: {sorted(unknown)}")
        return cls(**kwargs)

    # ------------------------------------------------------------------
    # Matchers
    # ------------------------------------------------------------------

    def next_reserved(self, text: str, pos: int = 0) -> Optional[re.Match]:
        if self._reserved_re is None:
            return None
        return self._reserved_re.search(text, pos)

    def next_identifier(self, text: str, pos: int = 0) -> Optional[re.Match]:
        return self._identifier_re.search(text, pos)

    def next_symbol(self, text: str, pos: int = 0) -> Optional[re.Match]:
        """Find the next identifier chain that doesn't start with a reserved word

        The capture spans joined member accesses and an optional trailing
        open parenthesis, eg ``Env.mesh.Rotate(`` in ``Env.mesh.Rotate(1)``
        """
        return self._symbol_re.search(text, pos)

    def is_reserved(self, word: str) -> bool:
        return word in self.reserved

    def is_delimiter(self, text: str) -> bool:
        """Check whether the text contains any word delimiter"""
        return self._delimiter_re.search(text) is not None

    def split_words(self, line: str) -> list[str]:
        return [w for w in self._delimiter_re.split(line) if w]

    def strip_paren_groups(self, text: str) -> str:
        return self._paren_group_re.sub("", text)

    def split_path(self, text: str) -> list[str]:
        """Split a qualified name into its names

        Paren groups are dropped. An open paren left without its close paren
        separates names like the joiner does, eg ``mesh(child``
        """
        stripped = self.strip_paren_groups(text)
        return [seg.strip() for seg in self._path_split_re.split(stripped)]


def javascript_syntax() -> SyntaxDefinition:
    """The syntax used by the JavaScript based filter scripting"""
    return SyntaxDefinition(reserved=frozenset(JAVASCRIPT_RESERVED))
