import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from valex.document import Document
from valex.vx_types import Range


class TestOffsets:
    def test_ascii_offsets_are_identity(self):
        doc = Document("3 miles")
        assert len(doc) == 7
        assert doc.byte_offset(2) == 2
        assert doc.char_offset(7) == 7

    def test_multibyte_offsets(self):
        # "é" and "€" are two and three bytes long
        doc = Document("é 5€")
        assert len(doc) == 7
        assert [doc.byte_offset(i) for i in range(5)] == [0, 2, 3, 4, 7]
        assert doc.char_offset(4) == 3

    def test_char_offset_inside_character(self):
        doc = Document("é")
        with pytest.raises(ValueError):
            doc.char_offset(1)

    def test_char_range_and_body(self):
        doc = Document("prix 20€ net")
        rng = doc.char_range(5, 8)
        assert rng == Range(5, 10)
        assert doc.body(rng) == "20€"


class TestInput:
    def test_bytes_are_decoded(self):
        doc = Document("naïve".encode("utf-8"))
        assert doc.text == "naïve"
        assert doc.raw == "naïve".encode("utf-8")

    def test_malformed_utf8_raises(self):
        with pytest.raises(UnicodeDecodeError):
            Document(b"ten \xff dollars")

    def test_non_text_input_raises(self):
        with pytest.raises(TypeError):
            Document(42)

    def test_empty_text(self):
        doc = Document("")
        assert len(doc) == 0
        assert doc.next_non_space(0) == 0


class TestAdjacency:
    def test_whitespace_only_gap_is_adjacent(self):
        doc = Document("a  \t b")
        assert doc.is_adjacent(1, 5)

    def test_touching_ranges_are_adjacent(self):
        doc = Document("$10")
        assert doc.is_adjacent(1, 1)

    def test_text_in_gap_is_not_adjacent(self):
        doc = Document("a x b")
        assert not doc.is_adjacent(1, 4)

    def test_backwards_is_not_adjacent(self):
        doc = Document("ab")
        assert not doc.is_adjacent(2, 1)

    def test_next_non_space(self):
        doc = Document("a   b")
        assert doc.next_non_space(1) == 4
        assert doc.next_non_space(5) == 5


class TestWordAlignment:
    @pytest.mark.parametrize(
        "text,start,end,expected",
        [
            ("someone", 4, 7, False),
            ("one two", 0, 3, True),
            ("$10", 0, 1, True),
            ("$10", 1, 3, True),
            ("123", 1, 3, False),
            ("5km", 0, 1, True),
            ("kmh", 0, 2, False),
            ("abc", 1, 1, False),
        ],
    )
    def test_is_word_aligned(self, text, start, end, expected):
        assert Document(text).is_word_aligned(start, end) is expected
