from __future__ import annotations

import heapq
from typing import Callable, Dict, List, Tuple

from .hexgrid import HexCoord, distance, neighbors_axial

Coord = Tuple[int, int]


def reconstruct(came_from: Dict[Coord, Coord], current: Coord) -> List[HexCoord]:
    path = [HexCoord(*current)]
    while current in came_from:
        current = came_from[current]
        path.append(HexCoord(*current))
    path.reverse()
    return path


def astar(start: Coord, goal: Coord,
          passable: Callable[[HexCoord], bool]) -> List[HexCoord]:
    """Shortest walk from ``start`` to ``goal`` inclusive of both ends.

    ``passable`` limits the search to the map region; every step costs 1.
    Heap entries carry (f, h, coord) so equal cost candidates pop in
    coordinate order and the chosen walk never depends on dict ordering.
    Returns ``[]`` when the goal is unreachable.
    """
    start = HexCoord(*start)
    goal = HexCoord(*goal)
    if start == goal:
        return [start]
    open_heap: List[Tuple[float, int, Coord]] = []
    heapq.heappush(open_heap, (float(distance(start, goal)), distance(start, goal), start))
    came_from: Dict[Coord, Coord] = {}
    g_score: Dict[Coord, float] = {start: 0.0}
    closed: set[Coord] = set()
    while open_heap:
        _, _, current = heapq.heappop(open_heap)
        if current == goal:
            return reconstruct(came_from, current)
        if current in closed:
            continue
        closed.add(current)
        for neighbor in neighbors_axial(*current):
            if neighbor in closed or not passable(neighbor):
                continue
            tentative = g_score[current] + 1.0
            if tentative < g_score.get(neighbor, float("inf")):
                came_from[neighbor] = current
                g_score[neighbor] = tentative
                h = distance(neighbor, goal)
                heapq.heappush(open_heap, (tentative + h, h, neighbor))
    return []
