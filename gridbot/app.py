"""Application entry for running the simulation loop."""

from __future__ import annotations

import os
from pathlib import Path

from gridbot.db.run_log import create_run_folder, record_run, write_footer
from gridbot.sim.collector import CollectorRobot
from gridbot.sim.events import RunHeader, RunSummary
from gridbot.sim.runner import Runner
from gridbot.sim.tick_loop import run_ticks
from gridbot.sim.world_generator import (
    DemoWorldGenerator,
    FixedWorldGenerator,
    JsonWorldGenerator,
    WorldGenerator,
    write_world_document,
)

DEFAULT_WORLD_SIZE = 20
DEFAULT_SEED = 7
DEFAULT_MAX_SCORE = 100.0
WORLD_FILE_NAME = "world.json"


def run_simulation(
    base_dir: Path,
    *,
    ticks: int | None = 10,
    size: int | None = None,
    seed: int | None = None,
    world_file: Path | None = None,
    max_score: float | None = None,
) -> Path:
    resolved_seed = _resolve_seed(seed)
    generator = _resolve_generator(world_file, size, resolved_seed, max_score)
    generated = generator.gen()
    run_dir, log_path = create_run_folder(base_dir)
    write_world_document(run_dir / WORLD_FILE_NAME, generated)
    robot = CollectorRobot(seed=resolved_seed)
    runner = Runner(robot, FixedWorldGenerator(generated), seed=resolved_seed)

    header = RunHeader(
        run_id=run_dir.name,
        seed=resolved_seed,
        dimension=runner.world.dimension,
        max_score=runner.world.score_counter.max_score,
        ticks=ticks,
        world_file=str(world_file) if world_file else None,
    )
    ticks_run = record_run(log_path, header, run_ticks(runner, ticks))
    runner.terminate()
    write_footer(
        log_path,
        RunSummary(
            ticks_run=ticks_run,
            score=runner.world.score_counter.get_score(),
            energy=robot.energy.energy_level,
            discovered=len(runner.world.discovered),
        ),
    )
    return run_dir


def _resolve_generator(
    world_file: Path | None,
    size: int | None,
    seed: int,
    max_score: float | None,
) -> WorldGenerator:
    path = world_file or _env_path("GRIDBOT_WORLD_FILE")
    if path is not None:
        return JsonWorldGenerator(path)
    return DemoWorldGenerator(
        size or int(os.getenv("GRIDBOT_WORLD_SIZE") or DEFAULT_WORLD_SIZE),
        seed=seed,
        max_score=max_score
        or float(os.getenv("GRIDBOT_MAX_SCORE") or DEFAULT_MAX_SCORE),
    )


def _resolve_seed(seed: int | None) -> int:
    if seed is not None:
        return seed
    return int(os.getenv("GRIDBOT_SEED") or DEFAULT_SEED)


def _env_path(name: str) -> Path | None:
    value = os.getenv(name)
    return Path(value) if value else None
