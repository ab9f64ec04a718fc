"""Rich rendering for world maps and run-log tick records."""

from __future__ import annotations

from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gridbot.sim.events import TickRecord
from gridbot.sim.tile import ContentKind, Tile, TileType

TILE_GLYPHS = {
    TileType.DEEP_WATER: ("~", "blue"),
    TileType.SHALLOW_WATER: ("-", "bright_blue"),
    TileType.SAND: (":", "yellow3"),
    TileType.GRASS: (",", "green3"),
    TileType.STREET: ("=", "grey70"),
    TileType.HILL: ("n", "dark_olive_green3"),
    TileType.MOUNTAIN: ("^", "grey50"),
    TileType.SNOW: ("*", "white"),
    TileType.LAVA: ("%", "red"),
    TileType.TELEPORT: ("@", "bright_magenta"),
    TileType.WALL: ("#", "bright_white"),
}

CONTENT_GLYPHS = {
    ContentKind.ROCK: "o",
    ContentKind.TREE: "T",
    ContentKind.GARBAGE: "g",
    ContentKind.FIRE: "F",
    ContentKind.COIN: "$",
    ContentKind.BIN: "B",
    ContentKind.CRATE: "C",
    ContentKind.BANK: "K",
    ContentKind.WATER: "w",
    ContentKind.FISH: "f",
    ContentKind.MARKET: "M",
    ContentKind.BUILDING: "H",
    ContentKind.BUSH: "b",
    ContentKind.JOLLY_BLOCK: "J",
    ContentKind.SCARECROW: "S",
}

CONTENT_STYLE = "bright_yellow"
ROBOT_STYLE = "bold bright_cyan"
UNKNOWN_STYLE = "grey23"


def render_map(
    world_map: list[list[Tile | None]],
    *,
    robot: tuple[int, int] | None = None,
    title: str = "World",
) -> RenderableType:
    lines = [
        _render_row(row_index, row, robot) for row_index, row in enumerate(world_map)
    ]
    return Panel(Group(*lines), title=title)


def _render_row(
    row_index: int, row: list[Tile | None], robot: tuple[int, int] | None
) -> Text:
    line = Text()
    for col_index, tile in enumerate(row):
        if robot == (row_index, col_index):
            line.append("R", style=ROBOT_STYLE)
        elif tile is None:
            line.append("?", style=UNKNOWN_STYLE)
        elif not tile.content.is_none:
            line.append(CONTENT_GLYPHS[tile.content.kind], style=CONTENT_STYLE)
        else:
            glyph, style = TILE_GLYPHS[tile.tile_type]
            line.append(glyph, style=style)
    return line


def render_tick(record: TickRecord, *, max_events: int = 8) -> RenderableType:
    header = Text(f"Tick {record.tick}", style="bold")
    status = _render_status(record)
    backpack = _render_backpack(record)
    events = _render_events(record, max_events=max_events)
    return Columns(
        [Panel(Group(header, status, backpack), title="Robot"), events]
    )


def _render_status(record: TickRecord) -> RenderableType:
    table = Table(show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Time", record.time)
    table.add_row("Weather", record.weather)
    table.add_row("Energy", str(record.energy))
    table.add_row("Position", f"{record.coordinate[0]}, {record.coordinate[1]}")
    table.add_row("Score", f"{record.score:.2f}")
    return table


def _render_backpack(record: TickRecord) -> RenderableType:
    held = {kind: amount for kind, amount in record.backpack.items() if amount}
    if not held:
        return Text("Backpack empty.")
    table = Table(title="Backpack", show_header=True, header_style="bold")
    table.add_column("Content")
    table.add_column("Amount", justify="right")
    for kind, amount in sorted(held.items()):
        table.add_row(kind, str(amount))
    return table


def _render_events(record: TickRecord, *, max_events: int) -> RenderableType:
    table = Table(title="Events", show_header=True, header_style="bold")
    table.add_column("Kind")
    table.add_column("Detail")
    events = record.events[-max_events:]
    for event in events:
        table.add_row(event.kind.value, _format_payload(event.payload))
    if not events:
        table.add_row("-", "None")
    return table


def _format_payload(payload: dict) -> str:
    if not payload:
        return "-"
    parts = []
    for key, value in payload.items():
        if isinstance(value, dict):
            value = value.get("tile_type") or value.get("kind") or value
        parts.append(f"{key}={value}")
    return ", ".join(parts)
