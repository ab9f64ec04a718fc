import pytest

from gridbot.errors import OutOfBounds, TeleportIsTrueOnGeneration
from gridbot.sim.collector import CollectorRobot
from gridbot.sim.coordinates import Coordinate
from gridbot.sim.energy import Energy
from gridbot.sim.environment import EnvironmentalConditions, WeatherType
from gridbot.sim.events import EventKind
from gridbot.sim.runner import BACKPACK_SIZE, Robot, Runner
from gridbot.sim.tick_loop import run_ticks
from gridbot.sim.tile import NO_CONTENT, Content, ContentKind, Tile, TileType
from gridbot.sim.world_generator import (
    DemoWorldGenerator,
    FixedWorldGenerator,
    GeneratedWorld,
)


def test_runner_places_robot_and_activates_spawn_teleport() -> None:
    world_map = _grass(3)
    world_map[1][1] = Tile(tile_type=TileType.TELEPORT)
    robot = Robot()

    runner = Runner(robot, FixedWorldGenerator(_generated(world_map)))

    assert robot.coordinate == Coordinate(1, 1)
    assert robot.backpack.size == BACKPACK_SIZE
    assert runner.world.world_map[1][1].teleport_active is True
    assert [event.kind for event in robot.events] == [EventKind.READY]


def test_game_tick_advances_time_and_recharges() -> None:
    robot = Robot(energy=Energy(100))
    runner = Runner(robot, FixedWorldGenerator(_generated(_grass(3), hour=23)))
    robot.drain_events()

    runner.game_tick()
    runner.game_tick()
    runner.terminate()

    kinds = [event.kind for event in robot.drain_events()]
    assert kinds == [
        EventKind.TIME_CHANGED,
        EventKind.ENERGY_RECHARGED,
        EventKind.TIME_CHANGED,
        EventKind.ENERGY_RECHARGED,
        EventKind.TERMINATED,
    ]
    assert robot.energy.energy_level == 120


def test_game_tick_reports_day_change() -> None:
    robot = Robot()
    generated = _generated(_grass(3), hour=23, minutes=60)
    runner = Runner(robot, FixedWorldGenerator(generated))
    robot.drain_events()

    runner.game_tick()

    assert robot.events[0].kind == EventKind.DAY_CHANGED
    assert runner.world.environmental_conditions.hour == 0


def test_runner_rejects_invalid_worlds() -> None:
    world_map = _grass(2)
    world_map[0][0] = Tile(tile_type=TileType.TELEPORT, teleport_active=True)
    with pytest.raises(TeleportIsTrueOnGeneration):
        Runner(Robot(), FixedWorldGenerator(_generated(world_map)))

    generated = _generated(_grass(2))
    generated.spawn = Coordinate(4, 4)
    with pytest.raises(OutOfBounds):
        Runner(Robot(), FixedWorldGenerator(generated))


def test_run_ticks_records_each_tick() -> None:
    robot = Robot()
    runner = Runner(robot, FixedWorldGenerator(_generated(_grass(3))))

    records = list(run_ticks(runner, 3))

    assert [record.tick for record in records] == [1, 2, 3]
    assert records[0].events[0].kind == EventKind.READY
    assert records[-1].time == "12:30"
    assert records[-1].coordinate == (1, 1)


def test_collector_gathers_adjacent_rock() -> None:
    world_map = _grass(3)
    world_map[1][2] = Tile(
        tile_type=TileType.GRASS, content=Content(ContentKind.ROCK, 2)
    )
    robot = CollectorRobot(seed=1)
    runner = Runner(robot, FixedWorldGenerator(_generated(world_map)))

    runner.game_tick()

    assert robot.backpack.get(Content(ContentKind.ROCK)) == 2
    assert runner.world.world_map[1][2].content == NO_CONTENT


def test_collector_survives_a_demo_run() -> None:
    robot = CollectorRobot(seed=3)
    runner = Runner(robot, DemoWorldGenerator(10, seed=3), seed=3)

    records = list(run_ticks(runner, 25))

    assert len(records) == 25
    assert all(0 <= record.energy <= 1000 for record in records)
    assert records[-1].score >= 0


def _grass(size: int) -> list[list[Tile]]:
    return [[Tile(tile_type=TileType.GRASS) for _ in range(size)] for _ in range(size)]


def _generated(
    world_map: list[list[Tile]], *, hour: int = 12, minutes: int = 10
) -> GeneratedWorld:
    return GeneratedWorld(
        world_map=world_map,
        spawn=Coordinate(len(world_map) // 2, len(world_map) // 2),
        environmental_conditions=EnvironmentalConditions.new(
            [WeatherType.SUNNY], minutes, hour
        ),
        max_score=10.0,
    )
