"""Pathfinding helpers robots can use on full or partially known maps."""

from gridbot.tools.dijkstra import (
    PathResult,
    TileTypeOrContent,
    build_graph,
    build_path,
    dijkstra,
    find_shortest_paths,
    reach_tiles,
)
from gridbot.tools.known_map import build_known_matrix, plan_route

__all__ = [
    "PathResult",
    "TileTypeOrContent",
    "build_graph",
    "build_known_matrix",
    "build_path",
    "dijkstra",
    "find_shortest_paths",
    "plan_route",
    "reach_tiles",
]
