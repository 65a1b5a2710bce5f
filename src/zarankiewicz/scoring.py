"""Antidistance and antisum scoring on top of a distance map."""

from itertools import combinations

import numpy as np

from zarankiewicz.distance_map import DistanceMap
from zarankiewicz.letters import Letter, Word, antipode, map_to_base, relabel, rotate_to_zero


def zarankiewicz_number(num_nodes: int) -> int:
    """Return Z(n) = floor(n/2) * floor((n-1)/2)."""
    return (num_nodes // 2) * ((num_nodes - 1) // 2)


def zarankiewicz_conjecture(left_nodes: int, right_nodes: int) -> int:
    """Return the conjectured crossing number Z(m) * Z(n) of K(m, n)."""
    return zarankiewicz_number(left_nodes) * zarankiewicz_number(right_nodes)


class Scorer:
    """Score letters and words using an injected distance map.

    The distance map holds distances measured from the base letter, so a pair of letters is
    scored by relabeling both until the first one becomes the base letter.
    """

    def __init__(self, distance_map: DistanceMap) -> None:
        self.distance_map = distance_map
        self.n = distance_map.n
        self.self_distance = zarankiewicz_number(self.n)
        """Antidistance of any letter to itself."""

    def antidistance(self, left: Letter, right: Letter) -> int:
        """Return the distance between the antipode of `left` and `right`.

        Raises:
            InvariantViolation: if the canonical form of the pair is missing from the map.
        """
        if left == right:
            return self.self_distance

        left = antipode(left)
        if left == right:
            return 0

        # Rename elements so that left becomes the base letter, then bring 0 to the front
        mapped_right = rotate_to_zero(relabel(right, map_to_base(left)))
        return self.distance_map[mapped_right]

    def antisum(self, word: Word) -> int:
        """Return the sum of antidistances over all unordered pairs of letters in `word`."""
        if len(word) == 1:
            return 0
        return sum(self.antidistance(x, y) for x, y in combinations(word, 2))

    def pair_matrix(self, word: Word) -> np.ndarray:
        """Return the matrix `D` with `D[i, j] = antidistance(word[i], word[j])`.

        The antisum of the reordering `word[p[0]], word[p[1]], ...` is the sum of the strict
        upper triangle of `D[np.ix_(p, p)]`.
        """
        k = len(word)
        matrix = np.zeros((k, k), dtype=np.int64)
        for i in range(k):
            for j in range(k):
                if i != j:
                    matrix[i, j] = self.antidistance(word[i], word[j])
        return matrix
