"""Adjacency rule of the cyclic permutation graph.

Letters whose first element is 0 stand for cyclic orders.  Two cyclic orders are adjacent
when they differ by swapping two cyclically consecutive elements.  Swaps that touch
position 0 are followed by a rotation so that the leading element is kept in place.
"""

from zarankiewicz.letters import Letter


def get_neighbors(node: Letter) -> list[Letter]:
    """Return the `len(node)` neighbors of a letter.

    Args:
        node (Letter): The letter to expand.

    Returns:
        Neighbors in a fixed order: the swap of positions 0 and 1 (rotated left), the
        interior adjacent swaps, then the swap of the last and first positions (rotated
        right before swapping).
    """
    max_idx = len(node) - 1
    neighbors: list[Letter] = []

    # Swap first and second, then rotate left so the leading element stays first
    swapped = list(node)
    swapped[0], swapped[1] = swapped[1], swapped[0]
    neighbors.append(tuple(swapped[1:] + swapped[:1]))

    for idx in range(1, max_idx):
        swapped = list(node)
        swapped[idx], swapped[idx + 1] = swapped[idx + 1], swapped[idx]
        neighbors.append(tuple(swapped))

    # Rotate right, then swap first and second
    rotated = list(node[-1:] + node[:-1])
    rotated[0], rotated[1] = rotated[1], rotated[0]
    neighbors.append(tuple(rotated))

    return neighbors
