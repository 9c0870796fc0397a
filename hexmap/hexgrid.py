# hexgrid.py - Pointy-top hex axial math and region helpers (Python 3.10+)
from __future__ import annotations
import math
from typing import Iterator, List, NamedTuple, Optional, Tuple

SQRT3 = math.sqrt(3.0)


class ParseError(ValueError):
    """Raised when a string is not a canonical ``"q,r"`` hex key."""


class HexCoord(NamedTuple):
    q: int
    r: int


# Direction indices 0..5: E, NE, NW, W, SW, SE
HEX_DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (+1, 0), (+1, -1), (0, -1), (-1, 0), (-1, +1), (0, +1),
)


def hex_key(coord: HexCoord) -> str:
    """Canonical mapping key for ``coord``, e.g. ``"5,-3"``."""
    return f"{coord[0]},{coord[1]}"


def parse_hex_key(key: str) -> HexCoord:
    """Inverse of :func:`hex_key`.

    Raises :class:`ParseError` when the key is missing its comma, has more
    than two components, or a component is not a base-10 integer.
    """
    if not isinstance(key, str):
        raise ParseError(f"hex key must be a string, not {type(key).__name__}")
    parts = key.split(",")
    if len(parts) != 2:
        raise ParseError(f"malformed hex key {key!r}: expected 'q,r'")
    values = []
    for part in parts:
        s = part.strip()
        if not (s.isascii() and (s.isdigit() or (s[:1] in {"+", "-"} and s[1:].isdigit()))):
            raise ParseError(f"malformed hex key {key!r}: {part!r} is not an integer")
        values.append(int(s))
    return HexCoord(values[0], values[1])


def distance(a: HexCoord, b: HexCoord) -> int:
    """Calculate hexagonal distance between two axial coordinates."""
    dq = a[0] - b[0]
    dr = a[1] - b[1]
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2


hex_distance = distance


def neighbors_axial(q: int, r: int) -> Iterator[HexCoord]:
    for dq, dr in HEX_DIRECTIONS:
        yield HexCoord(q + dq, r + dr)


def hex_neighbors(coord: HexCoord) -> List[HexCoord]:
    """The six adjacent hexes in direction order E, NE, NW, W, SW, SE."""
    return list(neighbors_axial(coord[0], coord[1]))


def hex_direction(a: HexCoord, b: HexCoord) -> int:
    """Direction index (0-5) of the step from ``a`` to adjacent ``b``."""
    step = (b[0] - a[0], b[1] - a[1])
    try:
        return HEX_DIRECTIONS.index(step)
    except ValueError:
        raise ValueError(f"{tuple(b)} is not adjacent to {tuple(a)}") from None


def connection_shape(current: HexCoord, prev: Optional[HexCoord],
                     nxt: Optional[HexCoord]) -> Tuple[str, int]:
    """Piece shape ("straight"/"corner") and rotation for a hex on a chain.

    Chain ends are straight pieces facing their only link; a pass-through
    with opposite links is straight, anything else is a corner turned toward
    the incoming link.
    """
    prev_dir = hex_direction(current, prev) if prev is not None else -1
    next_dir = hex_direction(current, nxt) if nxt is not None else -1
    if prev_dir == -1 or next_dir == -1:
        return "straight", max(next_dir, prev_dir, 0)
    if abs(next_dir - prev_dir) == 3:
        return "straight", min(prev_dir, next_dir)
    return "corner", prev_dir


def _check_size(hex_size: float) -> None:
    if not hex_size > 0:
        raise ValueError(f"hex_size must be positive, got {hex_size!r}")


def hex_to_world(coord: HexCoord, hex_size: float = 1.0) -> Tuple[float, float]:
    """Pointy-top axial spacing -> world (x, z)."""
    _check_size(hex_size)
    q, r = coord
    x = hex_size * (SQRT3 * q + SQRT3 / 2.0 * r)
    z = hex_size * (1.5 * r)
    return x, z


def world_to_hex(x: float, z: float, hex_size: float = 1.0) -> HexCoord:
    """Convert world (x, z) to the containing hex (pointy-top)."""
    _check_size(hex_size)
    q = (SQRT3 / 3.0 * x - 1.0 / 3.0 * z) / hex_size
    r = (2.0 / 3.0 * z) / hex_size
    return hex_round(q, r)


def hex_round(q: float, r: float) -> HexCoord:
    """Round fractional axial coordinates to nearest hex."""
    s = -q - r
    rq = round(q)
    rr = round(r)
    rs = round(s)

    q_diff = abs(rq - q)
    r_diff = abs(rr - r)
    s_diff = abs(rs - s)

    if q_diff > r_diff and q_diff > s_diff:
        rq = -rr - rs
    elif r_diff > s_diff:
        rr = -rq - rs

    return HexCoord(int(rq), int(rr))


def hex_line(a: HexCoord, b: HexCoord) -> List[HexCoord]:
    """Straight run of hexes from ``a`` to ``b`` inclusive."""
    n = distance(a, b)
    if n == 0:
        return [HexCoord(a[0], a[1])]
    # nudge off exact edges so ties round consistently
    aq, ar = a[0] + 1e-6, a[1] + 1e-6
    bq, br = b[0] + 1e-6, b[1] + 1e-6
    out: List[HexCoord] = []
    for i in range(n + 1):
        t = i / n
        out.append(hex_round(aq + (bq - aq) * t, ar + (br - ar) * t))
    return out


# --- rectangular region (odd-r rows) -----------------------------------------

def offset_col(coord: HexCoord) -> int:
    """Offset column of an axial coordinate; row ``r`` shifts by ``r // 2``."""
    return coord[0] + coord[1] // 2


def region_coords(width: int, height: int) -> List[HexCoord]:
    """All coordinates of a ``width`` x ``height`` region, sorted by (r, q)."""
    out: List[HexCoord] = []
    for r in range(height):
        r_off = r // 2
        for q in range(-r_off, width - r_off):
            out.append(HexCoord(q, r))
    return out


def row_major(coord: HexCoord) -> Tuple[int, int]:
    """Sort key matching :func:`region_coords` order."""
    return coord[1], coord[0]


def region_center(width: int, height: int) -> HexCoord:
    r = height // 2
    return HexCoord(width // 2 - r // 2, r)


def in_region(coord: HexCoord, width: int, height: int) -> bool:
    r = coord[1]
    return 0 <= r < height and 0 <= offset_col(coord) < width


def edge_distance(coord: HexCoord, width: int, height: int) -> int:
    """Rows/columns between ``coord`` and the nearest region boundary."""
    col = offset_col(coord)
    r = coord[1]
    return min(col, width - 1 - col, r, height - 1 - r)


def on_edge(coord: HexCoord, width: int, height: int) -> bool:
    return edge_distance(coord, width, height) == 0
