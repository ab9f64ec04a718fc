import pytest

from gridbot.sim.coordinates import Direction
from gridbot.sim.tile import Content, ContentKind, Tile, TileType
from gridbot.tools.dijkstra import (
    TileTypeOrContent,
    build_graph,
    build_path,
    dijkstra,
    find_connected_targets,
    find_shortest_paths,
    get_coordinates,
    path_to_directions,
    reach_tiles,
    reconstruct_shortest_path,
)
from gridbot.tools.known_map import (
    build_known_matrix,
    plan_route,
    shortest_paths_over_known,
)


def test_build_graph_skips_unwalkable_tiles() -> None:
    grid = _grid("GGG", "GWG", "GGG")

    graph, targets = build_graph(grid, TileTypeOrContent(tile_type=TileType.WALL))

    assert targets == []
    assert graph[4] == []
    assert [edge.index for edge in graph[1]] == [2, 0]
    assert [edge.index for edge in graph[3]] == [0, 6]


def test_dijkstra_routes_around_walls() -> None:
    graph, _ = build_graph(_grid("GGG", "GWG", "GGG"))

    distances, predecessors = dijkstra(graph, 3)
    path = reconstruct_shortest_path(predecessors, 5)

    assert distances[5] == 4
    assert distances[4] is None
    assert path is not None
    assert path[0] == 3 and path[-1] == 5 and len(path) == 5


def test_uphill_steps_pay_squared_elevation() -> None:
    grid = _grid("GGG")
    grid[0][1].elevation = 2

    graph, _ = build_graph(grid)
    distances, _ = dijkstra(graph, 0)

    assert distances[1] == 5
    assert distances[2] == 6


def test_start_node_has_no_path_to_itself() -> None:
    graph, _ = build_graph(_grid("GG"))
    results = find_shortest_paths(graph, 0, [0, 1])

    assert results[0].path is None
    assert results[0].total_cost == 0
    assert results[1].path == [0, 1]
    assert results[1].total_cost == 1


def test_build_path_visits_nearest_target_first() -> None:
    grid = _grid("GGG", "GGG", "GGG")
    graph, _ = build_graph(grid)

    legs = build_path(graph, 0, [8, 2], get_coordinates(grid))

    assert legs == [
        [Direction.RIGHT, Direction.RIGHT],
        [Direction.DOWN, Direction.DOWN],
    ]


def test_build_path_drops_unreachable_targets() -> None:
    grid = _grid("GGL", "GGG", "GGG")
    graph, _ = build_graph(grid)

    legs = build_path(graph, 0, [2, 6], get_coordinates(grid))

    assert legs == [[Direction.DOWN, Direction.DOWN]]


def test_path_to_directions_rejects_bad_paths() -> None:
    coordinates = get_coordinates(_grid("GGG", "GGG"))

    assert path_to_directions(coordinates, [0, 3, 4]) == [
        Direction.DOWN,
        Direction.RIGHT,
    ]
    with pytest.raises(ValueError):
        path_to_directions(coordinates, [0, 2])
    with pytest.raises(ValueError):
        path_to_directions(coordinates, [0, 42])


def test_reach_tiles_finds_matching_content() -> None:
    grid = _grid("GGG", "GWW", "GGG")
    grid[2][2].content = Content(ContentKind.ROCK, 1)
    grid[0][2].content = Content(ContentKind.ROCK, 2)

    target = TileTypeOrContent(content=Content(ContentKind.ROCK, 1))

    results = reach_tiles(grid, target, 0)

    assert [result.target_node for result in results] == [8]
    assert results[0].total_cost == 4


def test_find_connected_targets_ignores_isolated_nodes() -> None:
    graph, _ = build_graph(_grid("GWG", "GWG"))

    assert find_connected_targets(graph, 0, [2, 3, 5]) == [3]


def test_target_predicate_needs_exactly_one_field() -> None:
    with pytest.raises(ValueError):
        TileTypeOrContent()
    with pytest.raises(ValueError):
        TileTypeOrContent(tile_type=TileType.GRASS, content=Content(ContentKind.ROCK))


def test_known_matrix_fills_gaps_with_lava() -> None:
    known = {
        (5, 5): Tile(tile_type=TileType.GRASS),
        (5, 7): Tile(tile_type=TileType.HILL),
    }

    matrix = build_known_matrix(known)
    estimated = build_known_matrix(known, estimate=True)

    assert [tile.tile_type for tile in matrix[0]] == [
        TileType.GRASS,
        TileType.LAVA,
        TileType.HILL,
    ]
    assert estimated[0][1].tile_type == TileType.HILL


def test_estimation_keeps_lava_next_to_free_tiles() -> None:
    known = {
        (0, 0): Tile(tile_type=TileType.STREET),
        (0, 2): Tile(tile_type=TileType.STREET),
    }

    estimated = build_known_matrix(known, estimate=True)

    assert estimated[0][1].tile_type == TileType.LAVA


def test_routing_over_known_tiles() -> None:
    known = {
        (5, 5): Tile(tile_type=TileType.GRASS),
        (5, 7): Tile(tile_type=TileType.GRASS),
    }

    blind = shortest_paths_over_known(known, (5, 5), [(5, 7)])
    hopeful = shortest_paths_over_known(known, (5, 5), [(5, 7)], estimate=True)

    assert blind[0].path is None
    assert hopeful[0].total_cost == 2
    assert plan_route(known, (5, 5), [(5, 7)], estimate=True) == [
        [Direction.RIGHT, Direction.RIGHT]
    ]
    with pytest.raises(ValueError):
        shortest_paths_over_known(known, (0, 0), [(5, 7)])
    with pytest.raises(ValueError):
        build_known_matrix({})


_TILES = {
    "G": TileType.GRASS,
    "W": TileType.WALL,
    "L": TileType.LAVA,
}


def _grid(*rows: str) -> list[list[Tile]]:
    return [[Tile(tile_type=_TILES[char]) for char in row] for row in rows]
