import pytest
from QScriptAssist.function_library import FunctionLibraryTree, ROOT
from QScriptAssist.highlighter import Highlighter, Span, KEYWORD, SYMBOL
from QScriptAssist.syntax_definition import SyntaxDefinition
from helpers import flat_library, nested_library


def make_highlighter(reserved=(), library=None):
    syntax = SyntaxDefinition(reserved=frozenset(reserved))
    if library is None:
        library = flat_library()
    return Highlighter(syntax, library)


class TestKeywordPass:
    """Test the reserved word pass"""

    def test_spans_are_word_bounded_and_disjoint(self):
        hl = make_highlighter({"in", "instanceof", "if"})
        spans = hl.keyword_spans("if x instanceof y in z")
        assert spans == [Span(0, 2, KEYWORD), Span(5, 10, KEYWORD), Span(18, 2, KEYWORD)]
        for a, b in zip(spans, spans[1:]):
            assert a.end <= b.start

    def test_reserved_words_inside_identifiers_are_ignored(self):
        hl = make_highlighter({"in"})
        assert hl.keyword_spans("within inside") == []

    def test_no_reserved_words_is_a_no_op(self):
        hl = make_highlighter()
        assert hl.keyword_spans("if while") == []


class TestTreeMatch:
    """Test matching candidate text against the library"""

    def test_exact_name_without_closer(self):
        tree = FunctionLibraryTree()
        node = tree.add("Smooth")
        hl = make_highlighter(library=tree)
        assert hl.match_tree("Smooth", node, 0) == (True, [Span(0, 6, SYMBOL)])
        assert hl.match_tree("Smooth", ROOT, 0) == (True, [Span(0, 6, SYMBOL)])

    def test_name_with_closer(self):
        hl = make_highlighter()
        assert hl.match_tree("Rotate(", ROOT, 0) == (True, [Span(0, 7, SYMBOL)])

    def test_closer_is_optional(self):
        hl = make_highlighter()
        assert hl.match_tree("Scale", ROOT, 4) == (True, [Span(4, 5, SYMBOL)])

    def test_unrelated_text(self):
        hl = make_highlighter()
        assert hl.match_tree("banana", ROOT, 0) == (False, [])

    def test_name_must_be_word_bounded(self):
        hl = make_highlighter()
        assert hl.match_tree("Rotates", ROOT, 0) == (False, [])

    def test_nested_chain(self):
        hl = make_highlighter(library=nested_library())
        found, spans = hl.match_tree("Env.Rotate(", ROOT, 10)
        assert found
        assert spans == [Span(10, 4, SYMBOL), Span(14, 7, SYMBOL)]

    def test_incomplete_chain_keeps_valid_prefix(self):
        hl = make_highlighter(library=nested_library())
        found, spans = hl.match_tree("Env.Missing(", ROOT, 0)
        assert not found
        assert spans == [Span(0, 4, SYMBOL)]

    def test_failed_attempts_keep_their_spans(self):
        tree = FunctionLibraryTree()
        mesh = tree.add("mesh", closer=".")
        tree.add("Rotate", closer="(", parent=mesh)
        tree.add("Scale", closer="(")
        hl = make_highlighter(library=tree)
        found, spans = hl.match_tree("mesh.Scale(", ROOT, 0)
        assert not found
        assert spans == [Span(0, 5, SYMBOL), Span(5, 6, SYMBOL)]


class TestHighlightBlock:
    """Test both passes over a whole line"""

    def test_keyword_and_call(self):
        hl = make_highlighter({"if", "while"})
        spans = hl.highlight_block("if(x) Rotate(1)")
        assert spans == [Span(0, 2, KEYWORD), Span(6, 7, SYMBOL)]

    def test_symbols_paint_over_keywords(self):
        tree = FunctionLibraryTree()
        env = tree.add("Env", closer=".")
        tree.add("new", closer="(", parent=env)
        hl = make_highlighter({"new"}, tree)

        spans = hl.highlight_block("Env.new(")
        assert spans == [Span(4, 3, KEYWORD), Span(0, 4, SYMBOL), Span(4, 4, SYMBOL)]
        assert hl.style_map("Env.new(") == [SYMBOL] * 8

    def test_plain_text(self):
        hl = make_highlighter({"if"})
        assert hl.highlight_block("just some words") == []
        assert hl.style_map("ab") == [None, None]

    # fmt: off
    @pytest.mark.parametrize(
        "line, expected",
        [
            pytest.param("Scale(2); Rotate(1)", [Span(0, 6, SYMBOL), Span(10, 7, SYMBOL)], id="two_calls"),
            pytest.param("x = Scale",           [Span(4, 5, SYMBOL)],                      id="bare_name"),
            pytest.param("Rotate (",            [Span(0, 8, SYMBOL)],                      id="space_before_closer"),
        ],
    )
    # fmt: on
    def test_symbol_lines(self, line, expected):
        hl = make_highlighter()
        assert hl.highlight_block(line) == expected

    def test_zero_width_identifiers_terminate(self):
        syntax = SyntaxDefinition(reserved=frozenset({"if"}), identifier=r"(?=[A-Za-z_])\w*?")
        hl = Highlighter(syntax, flat_library())
        assert hl.highlight_block("if x Rotate(") == [Span(0, 2, KEYWORD)]


class TestLibraryChanges:
    """Test highlighting a library that grows after the first block"""

    def test_added_nodes_are_painted(self):
        tree = flat_library()
        hl = make_highlighter(library=tree)
        assert hl.highlight_block("Smooth(") == []
        tree.add("Smooth", closer="(")
        assert hl.highlight_block("Smooth(") == [Span(0, 7, SYMBOL)]

    def test_added_members_are_painted(self):
        tree = FunctionLibraryTree()
        env = tree.add("Env", closer=".")
        hl = make_highlighter(library=tree)
        assert hl.highlight_block("Env.Smooth") == [Span(0, 4, SYMBOL)]
        tree.add("Smooth", parent=env)
        assert hl.highlight_block("Env.Smooth") == [Span(0, 4, SYMBOL), Span(4, 6, SYMBOL)]
