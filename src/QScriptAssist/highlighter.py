from __future__ import annotations
import re
from dataclasses import dataclass
from typing import NamedTuple, Optional

from .function_library import ROOT, FunctionLibraryTree
from .syntax_definition import SyntaxDefinition, scan, word_bounded

KEYWORD = "keyword"
SYMBOL = "symbol"


class Span(NamedTuple):
    """A half open styled range of a single line"""

    start: int
    length: int
    tag: str

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True)
class HighlightRule:
    pattern: re.Pattern
    tag: str


class Highlighter:
    """Produce the styled spans of a line of script

    Lines are independent of each other, so there's no state carried from
    one block to the next. The spans are returned in the order they should
    be applied: keywords first, then library symbols, which are allowed to
    paint over keywords.
    """

    def __init__(self, syntax: SyntaxDefinition, library: FunctionLibraryTree):
        self.syntax = syntax
        self.library = library
        self._rules: dict[int, HighlightRule] = {}
        self._rules_version = library.version

    def highlight_block(self, text: str) -> list[Span]:
        spans = self.keyword_spans(text)
        spans.extend(self.symbol_spans(text))
        return spans

    def keyword_spans(self, text: str) -> list[Span]:
        return [
            Span(match.start(), match.end() - match.start(), KEYWORD)
            for match in scan(self.syntax.next_reserved, text)
        ]

    def symbol_spans(self, text: str) -> list[Span]:
        spans: list[Span] = []
        for match in scan(self.syntax.next_symbol, text):
            _found, found_spans = self.match_tree(match.group(0), ROOT, match.start())
            spans.extend(found_spans)
        return spans

    def style_map(self, text: str) -> list[Optional[str]]:
        """Resolve the spans of a line to one tag per character"""
        tags: list[Optional[str]] = [None] * len(text)
        for span in self.highlight_block(text):
            end = min(span.end, len(text))
            tags[span.start : end] = [span.tag] * (end - span.start)
        return tags

    def rule(self, index: int) -> HighlightRule:
        """Get the compiled pattern matching a library node and its closer"""
        if self._rules_version != self.library.version:
            self._rules.clear()
            self._rules_version = self.library.version
        rule = self._rules.get(index)
        if rule is None:
            node = self.library.node(index)
            pattern = word_bounded(re.escape(node.name))
            if node.closer:
                pattern += rf"(\s*{re.escape(node.closer)}\s*)?"
            rule = HighlightRule(re.compile(pattern), SYMBOL)
            self._rules[index] = rule
        return rule

    def match_tree(
        self, text: str, index: int = ROOT, start: int = 0
    ) -> tuple[bool, list[Span]]:
        """Match text against the library, styling every node that matched

        Returns whether some chain of nodes consumed the whole text, and the
        spans of all the nodes that matched along the way, including the
        ones on chains that ended up failing.
        """
        spans: list[Span] = []
        found = self._match_tree(text, index, start, spans)
        return found, spans

    def _match_tree(self, text: str, index: int, start: int, spans: list[Span]) -> bool:
        if index not in self.library:
            return False

        if self.library.is_root(index):
            for child in self.library.children(index):
                if self._match_tree(text, child, start, spans):
                    return True
            return False

        rule = self.rule(index)
        match = rule.pattern.search(text)
        if match is None:
            return False

        spans.append(Span(start + match.start(), match.end() - match.start(), rule.tag))
        if match.group(0) == text:
            return True

        rest = text[match.end() :]
        offset = start + match.end()
        for child in self.library.children(index):
            if self._match_tree(rest, child, offset, spans):
                return True
        return False
