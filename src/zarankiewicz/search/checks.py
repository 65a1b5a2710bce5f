"""Pruning predicates for the search.

`check1` decides whether a word may be extended by a letter.  `check2` looks for
reorderings of a finished word that score at least as well, marking the word as dominated.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from itertools import permutations

import numpy as np
from sortedcontainers import SortedSet

from zarankiewicz.errors import InvariantViolation
from zarankiewicz.letters import Letter, Word, base_letter
from zarankiewicz.scoring import Scorer, zarankiewicz_conjecture

F_MAXS: tuple[int, ...] = (6, 20, 40, 68, 104, 146, 197, 254)
"""Maximum admissible antisums of (k, 9)-sets, for k = 2 up to k = 9."""

SUBSET_SIZE = 4
"""No (7, n) or (9, n)-set contains a (SUBSET_SIZE, n) subset with antisum at or below
`subset_floor(n)`."""


def subset_floor(n: int) -> int:
    """Return Z(4) * Z(n), the antisum at or below which a 4-letter subset is excluded."""
    return zarankiewicz_conjecture(SUBSET_SIZE, n)


@dataclass(frozen=True)
class BoundTable:
    """Maximum admissible antisums, stored in order of word length from length 2.

    check1 reads the table by position: extending a word of length `k` compares against
    `maxs[k + 1]`.
    """

    maxs: tuple[int, ...] = F_MAXS

    def __getitem__(self, idx: int) -> int:
        """Return the bound stored at position `idx`.

        Raises:
            InvariantViolation: if `idx` is past either end of the table.
        """
        if not 0 <= idx < len(self.maxs):
            raise InvariantViolation(
                f"No antisum bound at position {idx} (table has {len(self.maxs)} entries)."
            )
        return self.maxs[idx]


class Checker:
    """Pruning predicates bound to a scorer and a bound table."""

    def __init__(
        self, scorer: Scorer, bounds: BoundTable | None = None, *, deterministic: bool = True
    ) -> None:
        self.scorer = scorer
        self.bounds = bounds or BoundTable()
        self.deterministic = deterministic
        self.subset_floor = subset_floor(scorer.n)

    def check1(self, prev_word: Word, new_letter: Letter, prev_antisum: int) -> bool:
        """Returns whether `prev_word` extended by `new_letter` can still satisfy the bound.

        Args:
            prev_word (Word): Non-empty word being extended; its first letter is special.
            new_letter (Letter): Candidate letter to append.
            prev_antisum (int): Antisum of `prev_word`.
        """
        antidistance = self.scorer.antidistance
        k = len(prev_word)

        if k == SUBSET_SIZE and prev_antisum <= self.subset_floor:
            return False

        a = prev_word[0]
        af = antidistance(a, new_letter)
        ax = sum(antidistance(a, x) for x in prev_word[1:])
        xf = sum(antidistance(x, new_letter) for x in prev_word)

        # The new letter cannot reach the required growth rate
        if af < prev_antisum + ax - (k - 2) * xf:
            return False
        if af > self.bounds[k + 1] - prev_antisum - ax:
            return False

        new_antisum = self.scorer.antisum(prev_word + (new_letter,))
        if k + 1 == SUBSET_SIZE and new_antisum <= self.subset_floor:
            return False

        return True

    def extensions(self, word: Word, antisum: int | None = None) -> Iterator[Word]:
        """Yield every one-letter extension of `word` that passes `check1`.

        Candidate letters are all permutations of the alphabet, in lexicographic order.
        """
        if antisum is None:
            antisum = self.scorer.antisum(word)
        for letter in permutations(base_letter(self.scorer.n)):
            if self.check1(word, letter, antisum):
                yield word + (letter,)

    def check2(self, word: Word) -> list[Word]:
        """Find reorderings of `word` that dominate it.

        Each reordering keeps one letter last and permutes the others.  Reorderings with a
        lower antisum are returned if there are any.  Otherwise the reorderings with an equal
        antisum that are lexicographically smaller than `word` are returned, so a word
        survives only when it is the least of its equal-antisum reorderings.

        Args:
            word (Word): The word to examine.

        Returns:
            The dominating reorderings, without duplicates; empty if none exist.
        """
        k = len(word)
        matrix = self.scorer.pair_matrix(word)
        upper = np.triu_indices(k, 1)

        def score(order: tuple[int, ...]) -> int:
            return int(matrix[np.ix_(order, order)][upper].sum())

        original = score(tuple(range(k)))
        better_antisum: set[Word] = SortedSet() if self.deterministic else set()
        better_lexicographically: set[Word] = SortedSet() if self.deterministic else set()

        for idx in range(k):
            rest = [i for i in range(k) if i != idx]
            for perm in permutations(rest):
                order = perm + (idx,)
                cmp = score(order) - original
                if cmp > 0:
                    continue
                new_word = tuple(word[i] for i in order)
                if cmp < 0:
                    better_antisum.add(new_word)
                elif not better_antisum and new_word < word:
                    better_lexicographically.add(new_word)

        if better_antisum:
            return list(better_antisum)
        return list(better_lexicographically)
