import json
import sys
from pathlib import Path

import pytest

from gridbot.__main__ import main
from gridbot.app import WORLD_FILE_NAME, run_simulation
from gridbot.db.run_log import RUN_LOG_NAME
from gridbot.render.run_reader import read_summary, read_tick_records
from gridbot.sim.coordinates import Coordinate
from gridbot.sim.environment import EnvironmentalConditions, WeatherType
from gridbot.sim.tile import Content, ContentKind, Tile, TileType
from gridbot.sim.world_generator import (
    GeneratedWorld,
    JsonWorldGenerator,
    write_world_document,
)


def test_run_simulation_writes_log_and_world(tmp_path: Path) -> None:
    run_dir = run_simulation(tmp_path, ticks=4, size=8, seed=5)

    log_path = run_dir / RUN_LOG_NAME
    with log_path.open("r", encoding="utf-8") as handle:
        records = [json.loads(line) for line in handle]

    assert records[0]["type"] == "header"
    assert records[0]["metadata"]["seed"] == 5
    assert records[0]["metadata"]["dimension"] == 8
    assert records[-1]["type"] == "footer"
    assert [record.tick for record in read_tick_records(log_path)] == [1, 2, 3, 4]
    summary = read_summary(log_path)
    assert summary is not None
    assert summary.ticks_run == 4
    assert (run_dir / WORLD_FILE_NAME).exists()


def test_run_simulation_reads_env_defaults(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("GRIDBOT_WORLD_SIZE", "6")
    monkeypatch.setenv("GRIDBOT_SEED", "11")

    run_dir = run_simulation(tmp_path, ticks=1)

    with (run_dir / RUN_LOG_NAME).open("r", encoding="utf-8") as handle:
        header = json.loads(handle.readline())
    assert header["metadata"]["dimension"] == 6
    assert header["metadata"]["seed"] == 11


def test_world_document_round_trip(tmp_path: Path) -> None:
    world_map = [
        [
            Tile(tile_type=TileType.GRASS),
            Tile(
                tile_type=TileType.STREET,
                content=Content(ContentKind.BANK, range(2, 9)),
            ),
        ],
        [
            Tile(
                tile_type=TileType.HILL,
                content=Content(ContentKind.TREE, 3),
                elevation=2,
            ),
            Tile(tile_type=TileType.TELEPORT),
        ],
    ]
    generated = GeneratedWorld(
        world_map=world_map,
        spawn=Coordinate(0, 0),
        environmental_conditions=EnvironmentalConditions.new(
            [WeatherType.FOGGY, WeatherType.SUNNY], 20, 6
        ),
        max_score=42.0,
        score_table={Content(ContentKind.TREE): 4.0},
    )
    path = tmp_path / "worlds" / "small.json"

    write_world_document(path, generated)
    loaded = JsonWorldGenerator(path).gen()

    assert loaded.world_map == world_map
    assert loaded.spawn == Coordinate(0, 0)
    assert list(loaded.environmental_conditions.weather_forecast) == [
        WeatherType.FOGGY,
        WeatherType.SUNNY,
    ]
    assert loaded.score_table == {Content(ContentKind.TREE): 4.0}


def test_json_world_generator_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Missing world file"):
        JsonWorldGenerator(tmp_path / "absent.json").gen()


def test_cli_runs_and_replays(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(
        sys,
        "argv",
        ["gridbot", "--ticks", "2", "--size", "6", "--replay-dir", str(tmp_path)],
    )
    main()
    assert "Run saved to" in capsys.readouterr().out

    run_dir = next(path for path in tmp_path.iterdir() if path.is_dir())
    monkeypatch.setattr(
        sys, "argv", ["gridbot", "--replay", str(run_dir), "--show-map"]
    )
    main()
    output = capsys.readouterr().out
    assert "Tick 2" in output
    assert "Finished after 2 ticks" in output
    assert "R" in output
