"""Grid-to-graph conversion and Dijkstra-based routing over tile maps."""

from __future__ import annotations

import heapq
from dataclasses import dataclass

from gridbot.sim.coordinates import Direction
from gridbot.sim.tile import Content, Tile, TileType, elevation_cost

Graph = list[list["Edge"]]


@dataclass(frozen=True)
class Edge:
    index: int
    weight: int


@dataclass(frozen=True)
class TileTypeOrContent:
    """Target predicate: match a terrain kind or an exact content value."""

    tile_type: TileType | None = None
    content: Content | None = None

    def __post_init__(self) -> None:
        if (self.tile_type is None) == (self.content is None):
            raise ValueError("set exactly one of tile_type or content")

    def matches(self, tile: Tile) -> bool:
        if self.tile_type is not None:
            return tile.tile_type == self.tile_type
        return tile.content == self.content


@dataclass(frozen=True)
class PathResult:
    path: list[int] | None
    target_node: int
    total_cost: int


def build_graph(
    grid: list[list[Tile]], target: TileTypeOrContent | None = None
) -> tuple[Graph, list[int]]:
    """Return the adjacency list and the walkable nodes matching `target`.

    Nodes are labelled `row * cols + col`; neighbours are listed up, right,
    down, left and only walkable ones get an edge.
    """
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    graph: Graph = [[] for _ in range(rows * cols)]
    targets: list[int] = []
    for row, line in enumerate(grid):
        for col, tile in enumerate(line):
            label = row * cols + col
            if not tile.tile_type.properties.walk:
                continue
            if target is not None and target.matches(tile):
                targets.append(label)
            graph[label] = _neighbours(grid, row, col, cols)
    return graph, targets


def _neighbours(grid: list[list[Tile]], row: int, col: int, cols: int) -> list[Edge]:
    tile = grid[row][col]
    edges = []
    for direction in (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT):
        d_row, d_col = direction.delta
        n_row, n_col = row + d_row, col + d_col
        if not (0 <= n_row < len(grid) and 0 <= n_col < cols):
            continue
        neighbour = grid[n_row][n_col]
        if not neighbour.tile_type.properties.walk:
            continue
        weight = neighbour.tile_type.properties.cost + elevation_cost(tile, neighbour)
        edges.append(Edge(index=n_row * cols + n_col, weight=weight))
    return edges


def dijkstra(graph: Graph, start: int) -> tuple[list[int | None], list[int | None]]:
    distances: list[int | None] = [None] * len(graph)
    predecessors: list[int | None] = [None] * len(graph)
    visited = [False] * len(graph)
    distances[start] = 0
    heap: list[tuple[int, int]] = [(0, start)]
    while heap:
        distance, index = heapq.heappop(heap)
        if visited[index]:
            continue
        visited[index] = True
        for edge in graph[index]:
            candidate = distance + edge.weight
            known = distances[edge.index]
            if known is None or candidate < known:
                distances[edge.index] = candidate
                predecessors[edge.index] = index
                heapq.heappush(heap, (candidate, edge.index))
    return distances, predecessors


def reconstruct_shortest_path(
    predecessors: list[int | None], target: int
) -> list[int] | None:
    path = [target]
    current = predecessors[target]
    while current is not None:
        path.append(current)
        current = predecessors[current]
    path.reverse()
    # A lone target means nothing led to it.
    if path == [target]:
        return None
    return path


def find_shortest_paths(
    graph: Graph, start: int, target_nodes: list[int]
) -> list[PathResult]:
    distances, predecessors = dijkstra(graph, start)
    return [
        PathResult(
            path=reconstruct_shortest_path(predecessors, target),
            target_node=target,
            total_cost=distances[target] or 0,
        )
        for target in target_nodes
    ]


def build_path(
    graph: Graph,
    start: int,
    target_nodes: list[int],
    coordinates: dict[int, tuple[int, int]],
) -> list[list[Direction]]:
    """Greedy nearest-next tour over `target_nodes`.

    Each leg goes to the cheapest still-pending reachable target; targets
    that cannot be reached from the current position are dropped.
    """
    pending = list(target_nodes)
    legs: list[list[Direction]] = []
    while pending:
        reachable = [
            result
            for result in find_shortest_paths(graph, start, pending)
            if result.path is not None
        ]
        if not reachable:
            break
        best = min(reachable, key=lambda result: result.total_cost)
        legs.append(path_to_directions(coordinates, best.path))
        start = best.target_node
        pending.remove(best.target_node)
    return legs


def path_to_directions(
    coordinates: dict[int, tuple[int, int]], path: list[int]
) -> list[Direction]:
    directions: list[Direction] = []
    for current, following in zip(path, path[1:]):
        if current not in coordinates or following not in coordinates:
            raise ValueError(f"missing coordinates for step {current} -> {following}")
        row, col = coordinates[current]
        next_row, next_col = coordinates[following]
        step = (next_row - row, next_col - col)
        direction = _DIRECTION_BY_DELTA.get(step)
        if direction is None:
            raise ValueError(f"nodes {current} and {following} are not adjacent")
        directions.append(direction)
    return directions


_DIRECTION_BY_DELTA: dict[tuple[int, int], Direction] = {
    direction.delta: direction for direction in Direction
}


def find_connected_targets(graph: Graph, start: int, targets: list[int]) -> list[int]:
    """Return the targets reachable from `start`, in visiting order."""
    wanted = set(targets)
    connected: list[int] = []
    visited = [False] * len(graph)
    heap: list[tuple[int, int]] = [(0, start)]
    while heap:
        distance, index = heapq.heappop(heap)
        if visited[index]:
            continue
        visited[index] = True
        if index in wanted:
            connected.append(index)
        for edge in graph[index]:
            if not visited[edge.index]:
                heapq.heappush(heap, (distance + edge.weight, edge.index))
    return connected


def get_coordinates(grid: list[list[Tile]]) -> dict[int, tuple[int, int]]:
    coordinates: dict[int, tuple[int, int]] = {}
    index = 0
    for row, line in enumerate(grid):
        for col in range(len(line)):
            coordinates[index] = (row, col)
            index += 1
    return coordinates


def reach_tiles(
    grid: list[list[Tile]], target: TileTypeOrContent, start: int
) -> list[PathResult]:
    """Shortest paths from `start` to every reachable tile matching `target`."""
    graph, targets = build_graph(grid, target)
    connected = find_connected_targets(graph, start, targets)
    return [
        result
        for result in find_shortest_paths(graph, start, connected)
        if result.path is not None
    ]
