"""Module entry point for `python -m gridbot`."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console

from gridbot.app import WORLD_FILE_NAME, run_simulation
from gridbot.db.run_log import RUN_LOG_NAME
from gridbot.render.run_reader import read_header, read_summary, read_tick_records
from gridbot.render.viewer import render_map, render_tick
from gridbot.sim.world_generator import JsonWorldGenerator

DEFAULT_REPLAY_DIR = Path("replay")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a gridbot simulation.")
    parser.add_argument(
        "--ticks",
        type=int,
        default=10,
        help="Number of ticks to run.",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=None,
        help="Side of the generated demo world (ignored with --world-file).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for world generation and the world's random draws.",
    )
    parser.add_argument(
        "--world-file",
        type=Path,
        default=None,
        help="Load the world from a JSON world document.",
    )
    parser.add_argument(
        "--replay-dir",
        type=Path,
        default=DEFAULT_REPLAY_DIR,
        help="Base directory for run logs.",
    )
    parser.add_argument(
        "--replay",
        type=Path,
        default=None,
        help="Print a saved run folder instead of running a simulation.",
    )
    parser.add_argument(
        "--show-map",
        action="store_true",
        help="Print the starting world map of the run.",
    )
    args = parser.parse_args()
    console = Console()

    if args.replay is not None:
        if args.show_map:
            _show_map(console, args.replay)
        _replay_run(console, args.replay)
        return

    created_run = run_simulation(
        args.replay_dir,
        ticks=args.ticks,
        size=args.size,
        seed=args.seed,
        world_file=args.world_file,
    )
    if args.show_map:
        _show_map(console, created_run)
    console.print(f"Run saved to {created_run}")


def _show_map(console: Console, run_folder: Path) -> None:
    world_path = run_folder / WORLD_FILE_NAME
    if not world_path.exists():
        raise SystemExit(f"No world file found in {run_folder}.")
    generated = JsonWorldGenerator(world_path).gen()
    console.print(render_map(generated.world_map, robot=generated.spawn.as_tuple()))


def _replay_run(console: Console, run_folder: Path) -> None:
    log_path = run_folder / RUN_LOG_NAME
    if not log_path.exists():
        raise SystemExit(f"No run log found in {run_folder}.")
    header = read_header(log_path)
    run_id = header.run_id if header else run_folder.name
    console.print(f"Run {run_id}", style="bold")
    for record in read_tick_records(log_path):
        console.print(render_tick(record))
    summary = read_summary(log_path)
    if summary is not None:
        console.print(
            f"Finished after {summary.ticks_run} ticks: score {summary.score:.2f}, "
            f"energy {summary.energy}, {summary.discovered} tiles discovered"
        )


if __name__ == "__main__":
    main()
