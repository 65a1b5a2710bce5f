from itertools import permutations

import pytest

from zarankiewicz.errors import InvariantViolation
from zarankiewicz.letters import BASE, Letter, antipode, base_letter
from zarankiewicz.scoring import Scorer
from zarankiewicz.search.checks import F_MAXS, BoundTable, Checker, subset_floor

BAR = antipode(BASE)


def test_bound_table() -> None:
    bounds = BoundTable()
    assert bounds[0] == 6
    assert bounds[3] == 68
    assert bounds[7] == 254
    for idx in (-1, 8):
        with pytest.raises(InvariantViolation):
            bounds[idx]


def test_subset_floor() -> None:
    assert subset_floor(9) == 32
    assert subset_floor(5) == 8


def test_check1_rejects_low_four_letter_words(checker: Checker, random_letters: list[Letter]) -> None:
    word = (BASE, BAR, BASE, BAR)
    antisum = checker.scorer.antisum(word)
    assert antisum == 32
    for letter in random_letters + [BASE, BAR]:
        assert checker.check1(word, letter, antisum) is False


def test_check1_rejects_when_fourth_letter_gives_low_antisum(checker: Checker) -> None:
    word = (BASE, BAR, BASE)
    assert checker.check1(word, BAR, checker.scorer.antisum(word)) is False


def test_check1_from_single_letter(checker: Checker, random_letters: list[Letter]) -> None:
    # The bound at position 2 exceeds every antidistance, so no first extension is pruned
    word = (BASE,)
    assert F_MAXS[2] > max(checker.scorer.distance_map.values())
    for letter in random_letters + [BASE, BAR]:
        assert checker.check1(word, letter, 0) is True


def test_check1_reads_bounds_by_position(small_checker: Checker) -> None:
    base = base_letter(5)
    bar = antipode(base)
    word = (bar, base, bar)
    antisum = small_checker.scorer.antisum(word)
    # A word of length 3 is checked against the bound at position 4
    strict = Checker(small_checker.scorer, BoundTable(maxs=(99, 99, 99, 99, 0)))
    loose = Checker(small_checker.scorer, BoundTable(maxs=(0, 0, 0, 0, 99)))
    assert strict.check1(word, bar, antisum) is False
    assert loose.check1(word, bar, antisum) is True


def test_check1_beyond_bound_table(checker: Checker) -> None:
    word = (BAR,) * 7
    with pytest.raises(InvariantViolation):
        checker.check1(word, BAR, 0)


def test_extensions(small_checker: Checker) -> None:
    base = base_letter(5)
    extensions = list(small_checker.extensions((base,)))
    assert extensions == [(base, letter) for letter in permutations(base)]


def test_check2_identical_letters(checker: Checker) -> None:
    assert checker.check2((BASE, BASE, BASE, BASE)) == []


def test_check2_prefers_lexicographically_smaller(checker: Checker) -> None:
    assert checker.check2((BASE, BAR)) == []
    assert checker.check2((BAR, BASE)) == [(BASE, BAR)]


def test_check2_candidates_are_equal_and_smaller(
    checker: Checker, random_letters: list[Letter]
) -> None:
    word = tuple(random_letters[:4])
    antisum = checker.scorer.antisum(word)
    better_words = checker.check2(word)
    assert better_words == sorted(better_words)
    assert len(set(better_words)) == len(better_words)
    for better in better_words:
        assert better != word
        assert better < word
        assert sorted(better) == sorted(word)
        assert checker.scorer.antisum(better) == antisum


def test_check2_least_reordering_survives(checker: Checker, random_letters: list[Letter]) -> None:
    word = tuple(sorted(random_letters[:4]))
    assert checker.check2(word) == []
    assert checker.check2(tuple(reversed(word)))


def test_check2_finds_lower_antisum() -> None:
    # An asymmetric antidistance makes the order of letters matter
    class SkewedScorer(Scorer):
        def antidistance(self, left: Letter, right: Letter) -> int:
            return 1 if left < right else 5

    base = base_letter(4)
    scorer = SkewedScorer.__new__(SkewedScorer)
    scorer.n = 4
    word = ((0, 3, 2, 1), (0, 1, 2, 3), (0, 2, 1, 3))
    better_words = Checker(scorer).check2(word)
    assert better_words
    for better in better_words:
        assert scorer.antisum(better) < scorer.antisum(word)
    assert (base, (0, 2, 1, 3), (0, 3, 2, 1)) in better_words


def test_check2_nondeterministic_matches(scorer: Scorer, random_letters: list[Letter]) -> None:
    word = tuple(random_letters[5:9])
    deterministic = Checker(scorer).check2(word)
    unordered = Checker(scorer, deterministic=False).check2(word)
    assert sorted(unordered) == deterministic
