"""Routing over a partially observed map.

A robot only knows the tiles it has seen. `build_known_matrix` lays those
observations out on a dense grid anchored at the smallest observed row and
column; everything unseen becomes lava, which the graph treats as a wall.
With `estimate=True` an unseen cell instead borrows the costliest observed
tile among its eight neighbours, so routes may cut through plausible but
unconfirmed ground.
"""

from __future__ import annotations

from typing import Callable

from gridbot.sim.coordinates import Direction
from gridbot.sim.tile import Tile, TileType
from gridbot.tools.dijkstra import (
    PathResult,
    build_graph,
    build_path,
    find_shortest_paths,
    get_coordinates,
)

KnownTiles = dict[tuple[int, int], Tile]

_NEIGHBOUR_OFFSETS = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)


def known_origin(known: KnownTiles) -> tuple[int, int]:
    if not known:
        raise ValueError("no known tiles")
    return min(row for row, _ in known), min(col for _, col in known)


def build_known_matrix(known: KnownTiles, estimate: bool = False) -> list[list[Tile]]:
    min_row, min_col = known_origin(known)
    max_row = max(row for row, _ in known)
    max_col = max(col for _, col in known)
    height = max_row - min_row + 1
    width = max_col - min_col + 1

    observed: list[list[Tile | None]] = [[None] * width for _ in range(height)]
    for (row, col), tile in known.items():
        observed[row - min_row][col - min_col] = tile

    matrix: list[list[Tile]] = []
    for row in range(height):
        line = []
        for col in range(width):
            tile = observed[row][col]
            if tile is not None:
                line.append(tile.copy())
            elif estimate:
                line.append(_estimate(observed, row, col))
            else:
                line.append(Tile(tile_type=TileType.LAVA))
        matrix.append(line)
    return matrix


def _estimate(observed: list[list[Tile | None]], row: int, col: int) -> Tile:
    best: Tile | None = None
    best_cost = 0
    for d_row, d_col in _NEIGHBOUR_OFFSETS:
        n_row, n_col = row + d_row, col + d_col
        if not (0 <= n_row < len(observed) and 0 <= n_col < len(observed[0])):
            continue
        neighbour = observed[n_row][n_col]
        if neighbour is None:
            continue
        cost = neighbour.tile_type.properties.cost
        if cost > best_cost:
            best, best_cost = neighbour, cost
    if best is None:
        return Tile(tile_type=TileType.LAVA)
    return best.copy()


def shortest_paths_over_known(
    known: KnownTiles,
    start: tuple[int, int],
    targets: list[tuple[int, int]],
    estimate: bool = False,
) -> list[PathResult]:
    """Dijkstra from `start` to each of `targets`, all in world coordinates.

    Node indices in the returned results refer to the known matrix; use
    `known_origin` together with the matrix width to map them back.
    """
    matrix = build_known_matrix(known, estimate)
    label = _labeler(matrix, known_origin(known))
    graph, _ = build_graph(matrix)
    return find_shortest_paths(graph, label(start), [label(t) for t in targets])


def plan_route(
    known: KnownTiles,
    start: tuple[int, int],
    targets: list[tuple[int, int]],
    estimate: bool = False,
) -> list[list[Direction]]:
    """Greedy tour over `targets`, one list of moves per visited target."""
    matrix = build_known_matrix(known, estimate)
    label = _labeler(matrix, known_origin(known))
    graph, _ = build_graph(matrix)
    return build_path(
        graph, label(start), [label(t) for t in targets], get_coordinates(matrix)
    )


def _labeler(
    matrix: list[list[Tile]], origin: tuple[int, int]
) -> Callable[[tuple[int, int]], int]:
    min_row, min_col = origin
    width = len(matrix[0])

    def label(position: tuple[int, int]) -> int:
        row, col = position[0] - min_row, position[1] - min_col
        if not (0 <= row < len(matrix) and 0 <= col < width):
            raise ValueError(f"{position} lies outside the known area")
        return row * width + col

    return label
