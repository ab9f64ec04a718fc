"""Action-resolution entry points robots call from `process_tick`.

Every entry point takes the acting robot and the world, raises a
`gridbot.errors.LibError` subclass on failure and leaves the world untouched
when it does. Energy is checked before any mutation; successful non-zero
energy spends emit `energy_consumed` before the tile update event.
"""

from __future__ import annotations

from typing import Iterable

from gridbot.errors import (
    CannotDestroy,
    CannotWalk,
    MustDestroyContentFirst,
    NoContent,
    NoMoreDiscovery,
    NotCraftable,
    NotEnoughContentInBackPack,
    NotEnoughContentProvided,
    NotEnoughEnergy,
    NotEnoughSpace,
    OperationNotAllowed,
    OutOfBounds,
    WrongContentUsed,
)
from gridbot.sim import events
from gridbot.sim.backpack import add_to_backpack, remove_from_backpack
from gridbot.sim.coordinates import Coordinate, Direction
from gridbot.sim.environment import (
    EnvironmentalConditions,
    calculate_cost_go_with_environment,
)
from gridbot.sim.runner import Runnable
from gridbot.sim.tile import (
    NO_CONTENT,
    Content,
    ContentKind,
    Tile,
    TileType,
    elevation_cost,
)
from gridbot.sim.world import World

TELEPORT_COST = 30
DISCOVERY_COST_PER_TILE = 3
VIEW_COST_PER_STEP = 3

MARKET_RATES: dict[ContentKind, int] = {
    ContentKind.ROCK: 1,
    ContentKind.TREE: 2,
    ContentKind.FISH: 5,
}

WATER_TILES = frozenset({TileType.SHALLOW_WATER, TileType.DEEP_WATER})
PAVABLE_TILES = frozenset(
    {TileType.GRASS, TileType.HILL, TileType.SAND, TileType.SNOW}
)
# terrain -> (rocks needed, cost multiplier)
FILLABLE_TILES: dict[TileType, tuple[int, int]] = {
    TileType.SHALLOW_WATER: (2, 1),
    TileType.DEEP_WATER: (3, 2),
    TileType.LAVA: (3, 3),
}
MOUNTAIN_DIG_MULTIPLIER = 4
FLAMMABLE = frozenset({ContentKind.TREE, ContentKind.NONE})

View = list[list[Tile | None]]


def go(
    robot: Runnable, world: World, direction: Direction
) -> tuple[View, Coordinate]:
    target = _target(robot, world, direction)
    tile = world.tile_at(target)
    if not tile.tile_type.properties.walk:
        raise CannotWalk()
    current = world.tile_at(robot.coordinate)
    cost = calculate_cost_go_with_environment(
        tile.tile_type.properties.cost,
        world.environmental_conditions,
        tile.tile_type,
    )
    cost += elevation_cost(current, tile)
    _consume(robot, cost)
    robot.coordinate = target
    if tile.tile_type == TileType.TELEPORT:
        tile.teleport_active = True
    robot.handle_event(events.moved(tile.copy(), target))
    return where_am_i(robot, world)


def teleport(
    robot: Runnable, world: World, coordinate: Coordinate
) -> tuple[View, Coordinate]:
    if not world.in_bounds(coordinate.row, coordinate.col):
        raise OutOfBounds()
    current = world.tile_at(robot.coordinate)
    target = world.tile_at(coordinate)
    if not (_is_active_teleport(current) and _is_active_teleport(target)):
        raise OperationNotAllowed("teleport needs two activated teleport tiles")
    _consume(robot, TELEPORT_COST)
    robot.coordinate = coordinate
    robot.handle_event(events.moved(target.copy(), coordinate))
    return where_am_i(robot, world)


def destroy(robot: Runnable, world: World, direction: Direction) -> int:
    """Collect the content in front of the robot; return the amount stored."""
    target = _target(robot, world, direction)
    tile = world.tile_at(target)
    content = tile.content
    if tile.tile_type in WATER_TILES and content.is_none:
        content = Content(ContentKind.WATER)
        value = world.rng.randrange(0, content.properties.max)
    elif content.kind == ContentKind.FIRE:
        value = 1
    else:
        if content.is_none:
            raise NoContent()
        if not content.properties.destroy or content.quantity is None:
            raise CannotDestroy()
        value = content.quantity

    cost = content.properties.cost
    _require_energy(robot, cost)
    if value > 0 and robot.backpack.free_space() == 0:
        raise NotEnoughSpace(0)

    stored = _store(robot, content, value)
    world.score_counter.add_score_destroy(content, stored)
    _consume(robot, cost)
    tile.content = NO_CONTENT
    robot.handle_event(events.tile_content_updated(tile.copy(), target))
    return stored


def put(
    robot: Runnable,
    world: World,
    content: Content,
    quantity: int,
    direction: Direction,
) -> int:
    """Place, deposit, sell or spend backpack content on the tile in front.

    Returns the amount removed from the backpack, or the coins credited when
    selling to a market and the rock gained when digging a mountain.
    """
    target = _target(robot, world, direction)
    tile = world.tile_at(target)
    if content.is_none and tile.tile_type != TileType.MOUNTAIN:
        raise WrongContentUsed()
    amount = min(quantity, robot.backpack.get(content), content.properties.max)
    placed = tile.content
    kind = content.kind

    if placed.is_range and placed.properties.disposable == kind:
        result = _deposit(robot, world, tile, content, quantity)
    elif kind == ContentKind.FIRE and placed.kind in FLAMMABLE:
        result = _set_on_fire(robot, tile, content)
    elif placed.kind == ContentKind.MARKET:
        result = _sell(robot, world, tile, content, quantity)
    elif kind == ContentKind.ROCK and tile.tile_type in PAVABLE_TILES:
        result = _pave(robot, tile, content, rocks=1, multiplier=1)
    elif kind == ContentKind.ROCK and tile.tile_type in FILLABLE_TILES:
        rocks, multiplier = FILLABLE_TILES[tile.tile_type]
        result = _fill(robot, tile, content, quantity, rocks, multiplier)
    elif content.is_none:
        result = _dig_mountain(robot, world, tile)
    elif placed.kind == ContentKind.FIRE and kind == ContentKind.WATER:
        result = _extinguish(robot, world, tile, content)
    elif placed.kind == ContentKind.FIRE:
        result = _burn(robot, content, amount)
    elif placed.is_none:
        result = _place(robot, tile, content, amount)
    elif placed.kind == kind:
        result = _top_up(robot, tile, content, amount)
    else:
        raise WrongContentUsed()

    robot.handle_event(events.tile_content_updated(tile.copy(), target))
    return result


def craft(robot: Runnable, content: Content) -> Content:
    """Craft one unit of `content` from the first recipe the backpack covers.

    Materials are removed before energy is spent, so a craft that fails on
    energy leaves them spent.
    """
    if content.is_none:
        raise NotCraftable()
    for ingredient, required in content.properties.craft:
        if not required:
            continue
        material = Content(ingredient)
        try:
            removed = remove_from_backpack(robot, material, required)
        except NoContent:
            continue
        if removed < required:
            add_to_backpack(robot, material, removed)
            continue
        _consume(robot, content.properties.cost)
        add_to_backpack(robot, content, 1)
        return content.to_default()
    raise NotCraftable()


def discover_tiles(
    robot: Runnable,
    world: World,
    to_discover: Iterable[Coordinate | tuple[int, int]],
) -> dict[Coordinate, Tile | None]:
    coordinates = [_as_coordinate(item) for item in to_discover]
    if len(coordinates) > world.discoverable:
        raise NoMoreDiscovery()
    cost = len(coordinates) * DISCOVERY_COST_PER_TILE
    _require_energy(robot, cost)
    world.discoverable -= len(coordinates)
    _consume(robot, cost)
    discovered: dict[Coordinate, Tile | None] = {}
    for coordinate in coordinates:
        if world.in_bounds(coordinate.row, coordinate.col):
            discovered[coordinate] = world.tile_at(coordinate).copy()
            world.mark_discovered(coordinate.row, coordinate.col)
        else:
            discovered[coordinate] = None
    return discovered


def one_direction_view(
    robot: Runnable, world: World, direction: Direction, distance: int
) -> list[list[Tile]]:
    """Look up to `distance` tiles away in a strip up to three tiles wide.

    Up/down return one row per step outward; left/right return up to three
    rows, each listing tiles outward. The strip narrows at the map edge.
    """
    row, col = robot.coordinate.as_tuple()
    last = world.dimension - 1
    if direction == Direction.UP:
        steps = min(distance, row)
    elif direction == Direction.DOWN:
        steps = min(distance, last - row)
    elif direction == Direction.LEFT:
        steps = min(distance, col)
    else:
        steps = min(distance, last - col)
    if steps <= 0:
        return []

    cost = 0 if steps <= 1 else steps * VIEW_COST_PER_STEP
    _require_energy(robot, cost)

    d_row, d_col = direction.delta
    if d_row:
        cells = [
            [(row + d_row * step, c) for c in _strip(col, last)]
            for step in range(1, steps + 1)
        ]
    else:
        cells = [
            [(r, col + d_col * step) for step in range(1, steps + 1)]
            for r in _strip(row, last)
        ]
    view = []
    for line in cells:
        view.append([world.world_map[r][c].copy() for r, c in line])
        for r, c in line:
            world.mark_discovered(r, c)
    _consume(robot, cost)
    return view


def robot_view(robot: Runnable, world: World) -> View:
    """3x3 neighbourhood centred on the robot, `None` outside the map."""
    row, col = robot.coordinate.as_tuple()
    view: View = []
    for r in range(row - 1, row + 2):
        line: list[Tile | None] = []
        for c in range(col - 1, col + 2):
            if world.in_bounds(r, c):
                line.append(world.world_map[r][c].copy())
                world.mark_discovered(r, c)
            else:
                line.append(None)
        view.append(line)
    return view


def where_am_i(robot: Runnable, world: World) -> tuple[View, Coordinate]:
    return robot_view(robot, world), robot.coordinate


def robot_map(world: World) -> View:
    known: View = [[None] * world.dimension for _ in range(world.dimension)]
    for coordinate in world.discovered:
        known[coordinate.row][coordinate.col] = world.tile_at(coordinate).copy()
    return known


def look_at_sky(world: World) -> EnvironmentalConditions:
    return world.environmental_conditions.copy()


def debug(robot: Runnable, world: World) -> tuple[list[list[Tile]], int, Coordinate]:
    world_map = [[tile.copy() for tile in row] for row in world.world_map]
    return world_map, world.dimension, robot.coordinate


def get_score(world: World) -> float:
    return world.score_counter.get_score()


def _target(robot: Runnable, world: World, direction: Direction) -> Coordinate:
    row, col = robot.coordinate.step(direction)
    if not world.in_bounds(row, col):
        raise OutOfBounds()
    return Coordinate(row, col)


def _as_coordinate(item: Coordinate | tuple[int, int]) -> Coordinate:
    if isinstance(item, Coordinate):
        return item
    return Coordinate(*item)


def _strip(center: int, last: int) -> range:
    return range(max(center - 1, 0), min(center + 1, last) + 1)


def _is_active_teleport(tile: Tile) -> bool:
    return tile.tile_type == TileType.TELEPORT and tile.teleport_active


def _require_energy(robot: Runnable, cost: int) -> None:
    if not robot.energy.has_enough_energy(cost):
        raise NotEnoughEnergy()


def _consume(robot: Runnable, cost: int) -> None:
    if cost == 0:
        return
    robot.energy.consume(cost)
    robot.handle_event(events.energy_consumed(cost))


def _store(robot: Runnable, content: Content, quantity: int) -> int:
    """Add to the backpack, reporting a partial add as the stored amount."""
    try:
        return add_to_backpack(robot, content, quantity)
    except NotEnoughSpace as exc:
        return exc.quantity


def _deposit(
    robot: Runnable, world: World, tile: Tile, content: Content, quantity: int
) -> int:
    receptacle = tile.content
    filled = receptacle.amount
    to_remove = min(len(filled), robot.backpack.get(content), quantity)
    cost = receptacle.properties.cost * to_remove
    _require_energy(robot, cost)
    removed = remove_from_backpack(robot, content, to_remove)
    tile.content = Content(receptacle.kind, range(filled.start + removed, filled.stop))
    _consume(robot, cost)
    world.score_counter.add_score_put(receptacle, removed)
    return removed


def _set_on_fire(robot: Runnable, tile: Tile, content: Content) -> int:
    if not tile.tile_type.properties.can_hold(content):
        raise WrongContentUsed()
    cost = content.properties.cost
    _require_energy(robot, cost)
    removed = remove_from_backpack(robot, content, 1)
    _consume(robot, cost)
    tile.content = content.to_default()
    return removed


def _sell(
    robot: Runnable, world: World, tile: Tile, content: Content, quantity: int
) -> int:
    market = tile.content
    if market.amount < 1:
        raise OperationNotAllowed("market has no operations left")
    rate = MARKET_RATES.get(content.kind)
    if rate is None:
        raise WrongContentUsed()
    sold = remove_from_backpack(robot, content, quantity)
    tile.content = Content(ContentKind.MARKET, market.amount - 1)
    world.score_counter.add_score_put(market, 1)
    return _store(robot, Content(ContentKind.COIN), sold * rate)


def _pave(
    robot: Runnable, tile: Tile, content: Content, *, rocks: int, multiplier: int
) -> int:
    if not TileType.STREET.properties.can_hold(tile.content):
        raise MustDestroyContentFirst()
    cost = content.properties.cost * rocks * multiplier
    _require_energy(robot, cost)
    removed = remove_from_backpack(robot, content, rocks)
    _consume(robot, cost)
    tile.tile_type = TileType.STREET
    return removed


def _fill(
    robot: Runnable,
    tile: Tile,
    content: Content,
    quantity: int,
    rocks: int,
    multiplier: int,
) -> int:
    if not TileType.STREET.properties.can_hold(tile.content):
        raise MustDestroyContentFirst()
    if quantity < rocks:
        raise NotEnoughContentProvided(f"{rocks} rocks are needed")
    held = robot.backpack.get(content)
    if held < rocks:
        raise NotEnoughContentInBackPack(f"{rocks} rocks are needed, {held} held")
    return _pave(robot, tile, content, rocks=rocks, multiplier=multiplier)


def _dig_mountain(robot: Runnable, world: World, tile: Tile) -> int:
    if not TileType.STREET.properties.can_hold(tile.content):
        raise MustDestroyContentFirst()
    rock = Content(ContentKind.ROCK)
    dug = world.rng.randrange(1, rock.properties.max)
    cost = rock.properties.cost * dug * MOUNTAIN_DIG_MULTIPLIER
    _require_energy(robot, cost)
    if robot.backpack.free_space() == 0:
        raise NotEnoughSpace(0)
    stored = _store(robot, rock, dug)
    _consume(robot, cost)
    tile.tile_type = TileType.STREET
    return stored


def _extinguish(robot: Runnable, world: World, tile: Tile, content: Content) -> int:
    cost = content.properties.cost
    _require_energy(robot, cost)
    removed = remove_from_backpack(robot, content, 1)
    _consume(robot, cost)
    tile.content = NO_CONTENT
    world.score_counter.add_score_put(Content(ContentKind.FIRE), removed)
    return removed


def _burn(robot: Runnable, content: Content, amount: int) -> int:
    cost = Content(ContentKind.WATER).properties.cost * amount
    _require_energy(robot, cost)
    removed = remove_from_backpack(robot, content, amount)
    _consume(robot, cost)
    return removed


def _place(robot: Runnable, tile: Tile, content: Content, amount: int) -> int:
    if not tile.tile_type.properties.can_hold(content):
        raise WrongContentUsed()
    cost = content.properties.cost * amount
    _require_energy(robot, cost)
    removed = remove_from_backpack(robot, content, amount)
    _consume(robot, cost)
    tile.content = content.with_amount(removed)
    return removed


def _top_up(robot: Runnable, tile: Tile, content: Content, amount: int) -> int:
    placed = tile.content
    if placed.is_range or not isinstance(placed.amount, int):
        raise OperationNotAllowed("only scalar content can be topped up")
    amount = min(amount, placed.properties.max - placed.amount)
    if amount <= 0:
        raise OperationNotAllowed("tile content is already at its max")
    cost = content.properties.cost * amount
    _require_energy(robot, cost)
    removed = remove_from_backpack(robot, content, amount)
    _consume(robot, cost)
    tile.content = placed.with_amount(placed.amount + removed)
    return removed
