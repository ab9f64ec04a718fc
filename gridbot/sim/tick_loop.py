"""Tick loop orchestration producing run-log records."""

from __future__ import annotations

from typing import Iterable

from gridbot.sim.events import Event, TickRecord
from gridbot.sim.runner import Robot, Runner


def run_ticks(runner: Runner, ticks: int | None) -> Iterable[TickRecord]:
    """Drive `runner` and yield one record per tick; `None` runs forever."""
    step_count = 0
    while ticks is None or step_count < ticks:
        runner.game_tick()
        step_count += 1
        yield build_record(runner, step_count)


def build_record(runner: Runner, tick: int) -> TickRecord:
    robot = runner.robot
    world = runner.world
    conditions = world.environmental_conditions
    events: list[Event] = []
    errors: list[str] = []
    if isinstance(robot, Robot):
        events = robot.drain_events()
        errors = robot.drain_errors()
    return TickRecord(
        tick=tick,
        time=conditions.time_of_day_string(),
        weather=conditions.weather.value,
        energy=robot.energy.energy_level,
        coordinate=robot.coordinate.as_tuple(),
        score=world.score_counter.get_score(),
        backpack={
            content.kind.value: amount
            for content, amount in robot.backpack.contents.items()
        },
        events=events,
        errors=errors,
    )
