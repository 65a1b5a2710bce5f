"""Breadth-first distance map over the cyclic permutation graph, with JSON persistence."""

import json
from collections import deque
from collections.abc import Iterator, Mapping
from math import factorial
from os import PathLike
from pathlib import Path
from time import time
from typing import TextIO

from zarankiewicz.errors import InvariantViolation
from zarankiewicz.graph import get_neighbors
from zarankiewicz.letters import N, Letter, base_letter, letter_from_str, letter_to_str
from zarankiewicz.util import int_comma, time_str


class DistanceMap(Mapping[Letter, int]):
    """Read-only mapping from each letter starting with 0 to its distance from the base letter.

    Lookups are keyed by letters of size `n`.  A missing key is an invariant violation
    rather than a `KeyError`, since every letter led by 0 is reachable from the base letter.
    """

    def __init__(self, distances: Mapping[Letter, int], n: int = N) -> None:
        self._distances = dict(distances)
        self.n = n
        """Alphabet size of the letters in the map."""

    def __getitem__(self, letter: Letter) -> int:
        try:
            return self._distances[letter]
        except KeyError:
            raise InvariantViolation(
                f"Expected letter {letter_to_str(letter)} to be in the distance map, but it was not!"
            ) from None

    def __iter__(self) -> Iterator[Letter]:
        return iter(self._distances)

    def __len__(self) -> int:
        return len(self._distances)

    def __contains__(self, letter: object) -> bool:
        return letter in self._distances

    def to_json_dict(self) -> dict[str, int]:
        """Return the map keyed by digit strings, sorted for stable output."""
        return {letter_to_str(letter): self._distances[letter] for letter in sorted(self._distances)}


def build_distance_map(n: int = N, *, out: TextIO | None = None) -> DistanceMap:
    """Run a breadth-first search from the base letter.

    Args:
        n (int): Alphabet size.
        out (TextIO | None): Stream for per-layer progress messages, if any.

    Returns:
        The distance of every letter reachable from the base letter.
    """
    start_time = time()
    base = base_letter(n)

    distances: dict[Letter, int] = {}
    queue: deque[Letter] = deque([base])
    discovered: set[Letter] = {base}

    # Distance of the layer currently being dequeued
    distance = 0
    # Nodes of the current layer still in the queue
    last_in_layer = 1

    while queue:
        node = queue.popleft()

        for neighbor in get_neighbors(node):
            if neighbor not in discovered:
                discovered.add(neighbor)
                queue.append(neighbor)

        distances[node] = distance

        last_in_layer -= 1
        if last_in_layer == 0:
            distance += 1
            last_in_layer = len(queue)
            if out is not None and queue:
                print(
                    f"Now on distance {distance}, queue is {int_comma(len(queue))} long",
                    file=out,
                    flush=True,
                )

    if out is not None:
        print(
            f"Built distance map with {int_comma(len(distances))} letters "
            f"in {time_str(time() - start_time)}",
            file=out,
            flush=True,
        )
    return DistanceMap(distances, n)


def load_distance_map(path: PathLike | str, n: int = N) -> DistanceMap | None:
    """Load a persisted distance map.

    Args:
        path (PathLike | str): JSON file mapping digit strings to distances.
        n (int): Expected alphabet size.

    Returns:
        The loaded map, or None if the file does not exist.

    Raises:
        InvariantViolation: if the file exists but is malformed or incomplete.
    """
    path = Path(path)
    if not path.is_file():
        return None

    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvariantViolation(f"Invalid distance map file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise InvariantViolation(f"Invalid distance map file {path}: expected a JSON object.")

    distances: dict[Letter, int] = {}
    for key, distance in raw.items():
        letter = letter_from_str(key, n)
        # bool is a subclass of int, reject it explicitly
        if not isinstance(distance, int) or isinstance(distance, bool) or distance < 0:
            raise InvariantViolation(f"Invalid distance {distance!r} for letter {key} in {path}.")
        if letter[0] != 0:
            raise InvariantViolation(f"Letter {key} in {path} does not start with 0.")
        distances[letter] = distance

    expected = factorial(n - 1)
    if len(distances) != expected:
        raise InvariantViolation(
            f"Distance map {path} has {len(distances)} letters, expected {expected}."
        )
    if distances[base_letter(n)] != 0:
        raise InvariantViolation(f"Distance map {path} does not place the base letter at 0.")

    return DistanceMap(distances, n)


def save_distance_map(distance_map: DistanceMap, path: PathLike | str) -> None:
    """Write a distance map as JSON, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(distance_map.to_json_dict(), f)


def get_distance_map(
    path: PathLike | str, n: int = N, *, out: TextIO | None = None
) -> DistanceMap:
    """Load the distance map from `path`, or build it and write it there.

    Args:
        path (PathLike | str): Location of the JSON snapshot.
        n (int): Alphabet size.
        out (TextIO | None): Stream for progress messages, if any.
    """
    distance_map = load_distance_map(path, n)
    if distance_map is not None:
        if out is not None:
            print(f"Loaded distance map from {path}", file=out, flush=True)
        return distance_map

    distance_map = build_distance_map(n, out=out)
    save_distance_map(distance_map, path)
    if out is not None:
        print(f"Saved distance map to {path}", file=out, flush=True)
    return distance_map
