import pytest

from zarankiewicz.errors import InvariantViolation
from zarankiewicz.letters import (
    BASE,
    antipode,
    base_letter,
    is_letter,
    letter_from_str,
    letter_to_str,
    map_to_base,
    map_to_letter,
    relabel,
    rotate_to_zero,
    word_from_str,
    word_to_str,
)


def test_letter_text_form() -> None:
    assert letter_from_str("012345687") == (0, 1, 2, 3, 4, 5, 6, 8, 7)
    assert letter_to_str(BASE) == "012345678"
    assert letter_from_str("2103", n=4) == (2, 1, 0, 3)


@pytest.mark.parametrize("text", ["01234567", "0123456789", "01234567a", "012345677", ""])
def test_invalid_letters(text: str) -> None:
    with pytest.raises(InvariantViolation):
        letter_from_str(text)


def test_word_text_form() -> None:
    word = word_from_str("012345678 012345687")
    assert word == (BASE, (0, 1, 2, 3, 4, 5, 6, 8, 7))
    assert word_to_str(word) == "012345678 012345687"


def test_invalid_words() -> None:
    with pytest.raises(InvariantViolation):
        word_from_str("")
    with pytest.raises(InvariantViolation):
        word_from_str("012345678  012345687")
    with pytest.raises(InvariantViolation):
        word_from_str("012345678 01234568")


def test_base_letter() -> None:
    assert BASE == base_letter()
    assert base_letter(4) == (0, 1, 2, 3)
    assert is_letter(BASE)
    assert not is_letter((0, 1, 1, 3, 4, 5, 6, 7, 8))
    assert not is_letter((0, 1, 2), n=4)


def test_antipode() -> None:
    assert antipode(BASE) == (0, 8, 7, 6, 5, 4, 3, 2, 1)
    assert antipode((3, 0, 1, 2)) == (3, 2, 1, 0)
    assert antipode(antipode((5, 2, 7, 0, 1, 8, 3, 6, 4))) == (5, 2, 7, 0, 1, 8, 3, 6, 4)


def test_relabeling() -> None:
    letter = (0, 8, 7, 6, 5, 4, 3, 2, 1)
    assert relabel(letter, map_to_base(letter)) == BASE
    source, target = (2, 0, 1), (1, 2, 0)
    assert relabel(source, map_to_letter(source, target)) == target


def test_rotate_to_zero() -> None:
    assert rotate_to_zero((3, 4, 0, 1, 2)) == (0, 1, 2, 3, 4)
    assert rotate_to_zero(BASE) == BASE
