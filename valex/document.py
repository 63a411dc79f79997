"""
Document: the input text plus the offset tables the engine needs.

Regexes run over the decoded str, so the engine works in character indices
internally. Every Range handed to callers is expressed in UTF-8 byte offsets;
this class converts between the two.
"""

from typing import List, Union

from .vx_types import Range


def _char_class(ch: str) -> str:
    """Letters and digits collapse to one class each; anything else is its own class."""
    if ch.isalpha():
        return "a"
    if ch.isdigit():
        return "d"
    return ch


class Document:
    def __init__(self, text: Union[str, bytes]):
        if isinstance(text, (bytes, bytearray)):
            # strict: malformed input raises UnicodeDecodeError before any matching
            text = bytes(text).decode("utf-8")
        elif not isinstance(text, str):
            raise TypeError(f"Expected str or bytes, got {type(text).__name__}")

        self.text: str = text
        self.raw: bytes = text.encode("utf-8")

        # char index -> byte offset, with a sentinel entry for len(text)
        byte_offsets: List[int] = [0] * (len(text) + 1)
        pos = 0
        for i, ch in enumerate(text):
            byte_offsets[i] = pos
            pos += len(ch.encode("utf-8"))
        byte_offsets[len(text)] = pos
        self._byte_offsets = byte_offsets
        self._char_offsets = {b: i for i, b in enumerate(byte_offsets)}

        # first non-whitespace char index at or after each char index
        first_non_space = [len(text)] * (len(text) + 1)
        nxt = len(text)
        for i in range(len(text) - 1, -1, -1):
            if not text[i].isspace():
                nxt = i
            first_non_space[i] = nxt
        self._first_non_space = first_non_space

    def __len__(self) -> int:
        return len(self.raw)

    def byte_offset(self, char_index: int) -> int:
        return self._byte_offsets[char_index]

    def char_offset(self, byte_offset: int) -> int:
        try:
            return self._char_offsets[byte_offset]
        except KeyError:
            raise ValueError(
                f"Byte offset {byte_offset} is not on a character boundary"
            ) from None

    def next_non_space(self, byte_offset: int) -> int:
        """Byte offset of the first non-whitespace character at or after byte_offset."""
        ci = self.char_offset(byte_offset)
        return self._byte_offsets[self._first_non_space[ci]]

    def is_adjacent(self, end: int, start: int) -> bool:
        """True when only whitespace separates a span ending at end from one at start."""
        if start < end:
            return False
        return start <= self.next_non_space(end)

    def is_word_aligned(self, start: int, end: int) -> bool:
        """
        Whether the character span [start, end) sits on token boundaries.

        A match may not begin in the middle of a run of letters or digits, nor end
        in one: "one" inside "someone" is rejected, "$" before "10" is fine.
        """
        text = self.text
        if start >= end:
            return False
        if start > 0 and _char_class(text[start - 1]) == _char_class(text[start]):
            return False
        if end < len(text) and _char_class(text[end - 1]) == _char_class(text[end]):
            return False
        return True

    def char_range(self, start: int, end: int) -> Range:
        """Convert a character span into a byte Range."""
        return Range(self._byte_offsets[start], self._byte_offsets[end])

    def body(self, rng: Range) -> str:
        return self.raw[rng.start : rng.end].decode("utf-8")
