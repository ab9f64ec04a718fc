import pytest

from gridbot.sim.score import ScoreCounter, init_score_table
from gridbot.sim.tile import Content, ContentKind, Tile, TileType


def test_score_table_normalizes_to_max_score() -> None:
    world_map = _map_with(Content(ContentKind.ROCK, 2))
    counter = ScoreCounter(10.0, world_map)

    assert counter.score_table[Content(ContentKind.ROCK)] == 5.0
    assert counter.score_table[Content(ContentKind.TREE)] == 15.0

    counter.add_score_destroy(Content(ContentKind.ROCK, 2), 2)
    assert counter.get_score() == 10.0


def test_custom_score_table_zeroes_unlisted_kinds() -> None:
    world_map = _map_with(Content(ContentKind.ROCK, 2))
    table = init_score_table(world_map, 10.0, {Content(ContentKind.ROCK): 2.0})

    assert table[Content(ContentKind.ROCK)] == 5.0
    assert table[Content(ContentKind.TREE)] == 0.0


def test_station_capacity_counts_towards_raw_score() -> None:
    world_map = _map_with(
        Content(ContentKind.GARBAGE, 2), Content(ContentKind.BIN, range(0, 2))
    )
    table = init_score_table(world_map, 24.0)

    # 2 garbage * 2 + 2 bin slots * 10
    assert table[Content(ContentKind.GARBAGE)] == 2.0
    assert table[Content(ContentKind.BIN)] == 10.0


def test_empty_map_has_unit_multiplier() -> None:
    table = init_score_table(_map_with(), 50.0)
    assert table[Content(ContentKind.COIN)] == 2.0


def test_score_table_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        init_score_table([], 10.0)
    with pytest.raises(ValueError):
        init_score_table(_map_with(), 0)
    with pytest.raises(ValueError):
        ScoreCounter(-10.0, _map_with(Content(ContentKind.ROCK, 2)))


def _map_with(*contents: Content) -> list[list[Tile]]:
    world_map = [[Tile(tile_type=TileType.GRASS) for _ in range(2)] for _ in range(2)]
    for index, content in enumerate(contents):
        row, col = divmod(index, 2)
        world_map[row][col] = Tile(tile_type=TileType.GRASS, content=content)
    return world_map
