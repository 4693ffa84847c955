"""Machine code loader for the LC-3 simulator."""

import re
from typing import Iterable

from .bitvector import BitVector
from .errors import LoadError
from .memory import MEMORY_SIZE, WORD_BITS

MAX_PROGRAM_WORDS = MEMORY_SIZE - 1

_WORD_RE = re.compile(r"^[01]{%d}$" % WORD_BITS)
_WHITESPACE_RE = re.compile(r"\s+")
_COMMENT_MARKERS = (";", "#", "//")


def clean_word(word: str) -> str:
    """Remove all whitespace from a machine code word."""
    return _WHITESPACE_RE.sub("", word)


def parse_word(word: str, index: int = 0) -> BitVector:
    """Validate a single word and convert it to a 16-bit vector."""
    if not isinstance(word, str):
        raise LoadError(
            f"Word {index} must be a string of bits, got {type(word).__name__}",
            addr=index,
        )
    cleaned = clean_word(word)
    if len(cleaned) != WORD_BITS:
        raise LoadError(
            f"Word {index} must have {WORD_BITS} bits, got {len(cleaned)}: {word!r}",
            addr=index,
        )
    if not _WORD_RE.match(cleaned):
        raise LoadError(
            f"Word {index} may only contain 0 and 1: {word!r}",
            addr=index,
        )
    return BitVector.from_literal(cleaned)


def validate_words(words: Iterable[str]) -> list[BitVector]:
    """Check a whole program and return its words; nothing is written here."""
    words = list(words)
    if not words:
        raise LoadError("Program contains no words")
    if len(words) > MAX_PROGRAM_WORDS:
        raise LoadError(
            f"Program has {len(words)} words, at most {MAX_PROGRAM_WORDS} fit"
        )
    return [parse_word(word, index) for index, word in enumerate(words)]


def _strip_comment(line: str) -> str:
    """Remove comment from line."""
    for marker in _COMMENT_MARKERS:
        idx = line.find(marker)
        if idx >= 0:
            line = line[:idx]
    return line


def parse_machine_code(text: str) -> list[str]:
    """Split program text into machine code words, one per line.

    Blank lines and comments are skipped. Each remaining line is checked
    so that errors report the source line rather than the word index.
    """
    words: list[str] = []
    for line_no, line in enumerate(text.split("\n"), 1):
        stripped = _strip_comment(line).strip()
        if not stripped:
            continue
        try:
            parse_word(stripped, len(words))
        except LoadError as e:
            e.source_line_no = line_no
            e.source_text = line.strip()
            raise
        words.append(stripped)

    if not words:
        raise LoadError("Program contains no words")
    return words
