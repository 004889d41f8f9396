import pytest
from QScriptAssist.utils import (
    dedupe_name,
    from_utf16_offset,
    function_name,
    len16,
    to_utf16_range,
    unique_default_name,
)


class TestNames:
    def test_unique_default_name_counts_up(self):
        assert unique_default_name("layer", ["layer_1", "layer_3", "other"]) == "layer_4"

    def test_unique_default_name_first_use(self):
        assert unique_default_name("layer", ["a", "b"]) == "layer_2"

    # fmt: off
    @pytest.mark.parametrize(
        "label, expected",
        [
            pytest.param("Remove duplicated vertices", "removeDuplicatedVertices", id="sentence"),
            pytest.param("smooth",                     "smooth",                   id="single_word"),
            pytest.param("3d view",                    "3dView",                   id="leading_digit"),
            pytest.param("...",                        "",                         id="no_words"),
        ],
    )
    # fmt: on
    def test_function_name(self, label, expected):
        assert function_name(label) == expected

    def test_dedupe_name(self):
        assert dedupe_name("a", ["a", "a_1"]) == "a_2"
        assert dedupe_name("b", ["a"]) == "b"


class TestUtf16:
    def test_len16(self):
        assert len16("a\U0001F600") == 3

    def test_ascii_ranges_are_unchanged(self):
        assert to_utf16_range("abc", 1, 2) == (1, 2)
        assert from_utf16_offset("abc", 2) == 2

    def test_surrogate_pairs(self):
        text = "\U0001F600ab"
        assert to_utf16_range(text, 1, 2) == (2, 2)
        assert from_utf16_offset(text, 3) == 2
