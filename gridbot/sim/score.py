"""Score weight derivation and accumulation."""

from __future__ import annotations

from gridbot.sim.tile import CONTENT_PROPERTIES, Content, ContentKind, Tile


class ScoreCounter:
    """Tracks the run score.

    The weight table is normalized so that disposing of everything the
    initial map offers, in the best order, lands close to `max_score`.
    """

    def __init__(
        self,
        max_score: float,
        world_map: list[list[Tile]],
        score_table: dict[Content, float] | None = None,
    ) -> None:
        self.score = 0.0
        self.max_score = max_score
        self.score_table = init_score_table(world_map, max_score, score_table)

    def add_score_destroy(self, content: Content, quantity: int) -> None:
        self.add_score_flat(self.score_table[content.to_default()] * quantity)

    def add_score_put(self, content: Content, quantity: int) -> None:
        self.add_score_flat(self.score_table[content.to_default()] * quantity)

    def add_score_flat(self, value: float) -> None:
        self.score += value

    def get_score(self) -> float:
        return self.score


def init_score_table(
    world_map: list[list[Tile]],
    max_score: float,
    table: dict[Content, float] | None = None,
) -> dict[Content, float]:
    if not world_map or not world_map[0]:
        raise ValueError("The world map is empty.")
    if max_score <= 0:
        raise ValueError(f"Max score must be positive, got {max_score}.")

    if table is None:
        weights = {
            kind: float(CONTENT_PROPERTIES[kind].score_weight) for kind in ContentKind
        }
    else:
        weights = {kind: 0.0 for kind in ContentKind}
        for content, weight in table.items():
            weights[content.kind] = weight

    collectables, disposables = _count_map(world_map)

    raw_sum = sum(amount * weights[kind] for kind, amount in collectables.items())

    # Stations with a higher weight get first pick of the supply.
    ordered = sorted(
        disposables.items(), key=lambda item: weights[item[1][0]], reverse=True
    )
    for disposed, (station, capacity) in ordered:
        supply = collectables.get(disposed, 0)
        station_weight = weights[station]
        if capacity <= supply:
            raw_sum += capacity * station_weight
            continue
        craftable = _craftable_amount(disposed, collectables)
        total = craftable + supply
        if total < capacity:
            raw_sum += total * station_weight
            _subtract_craft_materials(disposed, craftable, collectables)
        else:
            raw_sum += capacity * station_weight
            _subtract_craft_materials(disposed, capacity - supply, collectables)

    multiplier = max_score / raw_sum if raw_sum else 1.0
    return {Content(kind): weights[kind] * multiplier for kind in ContentKind}


def _count_map(
    world_map: list[list[Tile]],
) -> tuple[dict[ContentKind, int], dict[ContentKind, tuple[ContentKind, int]]]:
    """Split map content into collectable supply and disposal capacity.

    Disposal capacity is keyed by the disposed item and holds
    `(station, capacity)`.
    """
    collectables: dict[ContentKind, int] = {}
    disposables: dict[ContentKind, tuple[ContentKind, int]] = {}
    for kind in ContentKind:
        disposed = CONTENT_PROPERTIES[kind].disposable
        if disposed is None:
            collectables[kind] = 0
        else:
            disposables[disposed] = (kind, 0)

    for row in world_map:
        for tile in row:
            content = tile.content
            props = content.properties
            if props.score_weight == 0 or content.kind == ContentKind.FIRE:
                continue
            if content.is_range or content.kind == ContentKind.MARKET:
                capacity = len(content.amount) if content.is_range else content.amount
                station, current = disposables[props.disposable]
                disposables[props.disposable] = (station, current + capacity)
            elif content.kind == ContentKind.SCARECROW:
                collectables[content.kind] += 1
            else:
                collectables[content.kind] += content.amount
    return collectables, disposables


def _craftable_amount(kind: ContentKind, collectables: dict[ContentKind, int]) -> int:
    return sum(
        collectables[ingredient] // required
        for ingredient, required in CONTENT_PROPERTIES[kind].craft
        if required and ingredient in collectables
    )


def _subtract_craft_materials(
    kind: ContentKind, amount: int, collectables: dict[ContentKind, int]
) -> None:
    left_to_craft = amount
    for ingredient, required in CONTENT_PROPERTIES[kind].craft:
        if not required or ingredient not in collectables:
            continue
        crafted = collectables[ingredient] // required
        if crafted >= left_to_craft:
            collectables[ingredient] -= left_to_craft * required
            return
        collectables[ingredient] -= crafted * required
        left_to_craft -= crafted
