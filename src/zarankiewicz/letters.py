"""Letters (permutations of the alphabet) and words (sequences of letters).

A letter of size `N` is stored as a tuple of the integers `0..N-1`.  A word is a tuple of
letters.  The textual form of a letter is its digits concatenated (`"012345678"`) and the
textual form of a word is its letters separated by single spaces.
"""

from typing import TypeAlias

from zarankiewicz.errors import InvariantViolation

N = 9
"""Alphabet size, i.e. the length of every letter."""

Letter: TypeAlias = tuple[int, ...]
Word: TypeAlias = tuple[Letter, ...]

BASE: Letter = tuple(range(N))
"""The lexicographically smallest letter, root of the distance map."""


def base_letter(n: int = N) -> Letter:
    """Return the identity letter of size `n`."""
    return tuple(range(n))


def is_letter(letter: Letter, n: int = N) -> bool:
    """Returns whether `letter` is a permutation of `0..n-1`."""
    return len(letter) == n and sorted(letter) == list(range(n))


def letter_from_str(text: str, n: int = N) -> Letter:
    """Parse a letter from its digit string.

    Raises:
        InvariantViolation: if the text is not exactly a permutation of the digits `0..n-1`.
    """
    if len(text) != n or not text.isdigit():
        raise InvariantViolation(f"Invalid letter {text!r}: expected {n} digits.")
    letter = tuple(ord(ch) - ord("0") for ch in text)
    if not is_letter(letter, n):
        raise InvariantViolation(f"Invalid letter {text!r}: not a permutation of 0..{n - 1}.")
    return letter


def letter_to_str(letter: Letter) -> str:
    """Format a letter as its digit string."""
    return "".join(chr(ord("0") + num) for num in letter)


def word_from_str(text: str, n: int = N) -> Word:
    """Parse a space-separated word.

    Raises:
        InvariantViolation: if any letter is malformed or the word is empty.
    """
    if not text:
        raise InvariantViolation("Cannot parse an empty word.")
    return tuple(letter_from_str(part, n) for part in text.split(" "))


def word_to_str(word: Word) -> str:
    """Format a word as space-separated digit strings."""
    return " ".join(letter_to_str(letter) for letter in word)


def antipode(letter: Letter) -> Letter:
    """Keep the first element and reverse the rest."""
    return (letter[0],) + tuple(reversed(letter[1:]))


def map_to_base(letter: Letter) -> dict[int, int]:
    """Return the relabeling that turns `letter` into the base letter."""
    return {ele: idx for idx, ele in enumerate(letter)}


def map_to_letter(source: Letter, target: Letter) -> dict[int, int]:
    """Return the relabeling that turns `source` into `target`."""
    return dict(zip(source, target))


def relabel(letter: Letter, mapping: dict[int, int]) -> Letter:
    """Apply a symbol relabeling to every element of `letter`."""
    return tuple(mapping[ele] for ele in letter)


def rotate_to_zero(letter: Letter) -> Letter:
    """Rotate `letter` cyclically so that the symbol 0 comes first."""
    idx = letter.index(0)
    return letter[idx:] + letter[:idx]
