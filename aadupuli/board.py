"""Fixed board graph for Aadu Puli Aattam: 23 nodes, their coordinates and adjacency."""

from __future__ import annotations

from typing import Iterator

Node = int  # 1..23

# Display coordinates on a 400x400 canvas. Not used by the rules.
NODE_COORDS: dict[Node, tuple[int, int]] = {
    1: (200, 30),
    2: (130, 90),
    3: (270, 90),
    4: (80, 160),
    5: (200, 160),
    6: (320, 160),
    7: (40, 230),
    8: (130, 230),
    9: (200, 230),
    10: (270, 230),
    11: (360, 230),
    12: (90, 300),
    13: (200, 300),
    14: (310, 300),
    15: (200, 370),
    16: (200, 100),
    17: (120, 130),
    18: (280, 130),
    19: (200, 200),
    20: (80, 270),
    21: (320, 270),
    22: (130, 340),
    23: (270, 340),
}

# Directed as authored: some entries have no reverse edge (see missing_reverse_edges).
ADJACENCY: dict[Node, tuple[Node, ...]] = {
    1: (2, 3),
    2: (1, 4, 5, 3),
    3: (1, 2, 5, 6),
    4: (2, 5, 7, 8),
    5: (2, 3, 4, 6, 8, 9),
    6: (3, 5, 9, 10),
    7: (4, 8),
    8: (4, 5, 7, 9),
    9: (5, 6, 8, 10),
    10: (6, 9),
    11: (10,),
    12: (8, 13),
    13: (9, 12, 14, 15),
    14: (10, 13),
    15: (13,),
    16: (2, 3, 5),
    17: (4, 5, 8),
    18: (5, 6, 9),
    19: (5, 8, 9, 13),
    20: (8, 12, 22),
    21: (9, 14, 23),
    22: (12, 20),
    23: (14, 21),
}


def is_valid_node(node: Node) -> bool:
    return node in ADJACENCY


def all_nodes() -> tuple[Node, ...]:
    """All node ids in ascending order."""
    return tuple(ADJACENCY)


def neighbors(node: Node) -> tuple[Node, ...]:
    """Nodes directly reachable from ``node``."""
    assert node in ADJACENCY, f"Unknown node: {node}"
    return ADJACENCY[node]


def are_adjacent(a: Node, b: Node) -> bool:
    """True if there is an edge from ``a`` to ``b``."""
    return b in neighbors(a)


def coord(node: Node) -> tuple[int, int]:
    """Display coordinate of a node."""
    assert node in NODE_COORDS, f"Unknown node: {node}"
    return NODE_COORDS[node]


def edges() -> Iterator[tuple[Node, Node]]:
    """Iterate over every directed edge (from, to)."""
    for node, targets in ADJACENCY.items():
        for target in targets:
            yield (node, target)


def missing_reverse_edges() -> list[tuple[Node, Node]]:
    """
    Edges (a, b) whose reverse (b, a) is not in the graph.

    The board data is kept as authored; this is how callers find out which
    links only work in one direction.
    """
    return [(a, b) for a, b in edges() if a not in ADJACENCY[b]]
