import pytest

from hexmap.hexgrid import (
    HexCoord, ParseError, connection_shape, edge_distance, hex_direction,
    hex_distance, hex_key, hex_line, hex_neighbors, hex_round, hex_to_world,
    in_region, parse_hex_key, region_coords, world_to_hex,
)


def test_hex_key_roundtrip():
    assert hex_key(HexCoord(5, -3)) == "5,-3"
    assert parse_hex_key("5,-3") == HexCoord(5, -3)
    for q in range(-6, 7):
        for r in range(-6, 7):
            assert parse_hex_key(hex_key(HexCoord(q, r))) == (q, r)


@pytest.mark.parametrize("key", [
    "", "5", "5;3", "a,b", "1,2,3", "1.5,2", "1,", ",2", "- 1,2",
    "²,1", "1,-٣",
])
def test_parse_hex_key_rejects_malformed(key):
    with pytest.raises(ParseError):
        parse_hex_key(key)


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_hex_key("nope")


def test_hex_distance_examples():
    assert hex_distance(HexCoord(0, 0), HexCoord(0, 0)) == 0
    assert hex_distance(HexCoord(0, 0), HexCoord(1, 0)) == 1
    assert hex_distance(HexCoord(0, 0), HexCoord(0, 1)) == 1
    assert hex_distance(HexCoord(0, 0), HexCoord(3, 0)) == 3
    assert hex_distance(HexCoord(-2, 2), HexCoord(2, -2)) == 4


def test_neighbors_are_six_at_distance_one():
    origin = HexCoord(0, 0)
    ns = hex_neighbors(origin)
    assert len(ns) == 6
    assert len(set(ns)) == 6
    for n in ns:
        assert hex_distance(origin, n) == 1
    # fixed order: E, NE, NW, W, SW, SE
    assert ns[0] == (1, 0)
    assert ns[5] == (0, 1)


def test_hex_direction_matches_neighbor_order():
    c = HexCoord(3, -2)
    for i, n in enumerate(hex_neighbors(c)):
        assert hex_direction(c, n) == i
    with pytest.raises(ValueError):
        hex_direction(c, HexCoord(10, 10))


def test_world_roundtrip():
    for size in (0.5, 1.0, 10.0):
        for q in range(-5, 6):
            for r in range(-5, 6):
                x, z = hex_to_world(HexCoord(q, r), size)
                assert world_to_hex(x, z, size) == (q, r)


def test_world_to_hex_nearest():
    size = 10.0
    x, z = hex_to_world(HexCoord(2, 3), size)
    assert world_to_hex(x + size * 0.2, z - size * 0.2, size) == (2, 3)


def test_hex_to_world_pointy_layout():
    x, z = hex_to_world(HexCoord(0, 1), 1.0)
    assert x == pytest.approx(3 ** 0.5 / 2)
    assert z == pytest.approx(1.5)


def test_non_positive_hex_size_rejected():
    with pytest.raises(ValueError):
        hex_to_world(HexCoord(0, 0), 0)


def test_hex_round_idempotent_and_integral():
    assert hex_round(5, 3) == (5, 3)
    assert hex_round(-4, 7) == (-4, 7)
    rounded = hex_round(2.3, 1.1)
    assert isinstance(rounded.q, int) and isinstance(rounded.r, int)
    assert rounded == (2, 1)


def test_hex_line_is_contiguous():
    a, b = HexCoord(0, 0), HexCoord(4, -2)
    line = hex_line(a, b)
    assert line[0] == a and line[-1] == b
    assert len(line) == hex_distance(a, b) + 1
    for p, n in zip(line, line[1:]):
        assert hex_distance(p, n) == 1


def test_region_counts_and_order():
    coords = region_coords(16, 16)
    assert len(coords) == 256
    assert 200 < len(coords) < 300
    assert coords == sorted(coords, key=lambda c: (c.r, c.q))
    assert all(in_region(c, 16, 16) for c in coords)
    assert not in_region(HexCoord(-1, 0), 16, 16)
    assert not in_region(HexCoord(0, 16), 16, 16)
    # row 3 starts one column left in axial q
    assert HexCoord(-1, 3) in coords


def test_edge_distance():
    assert edge_distance(HexCoord(0, 0), 8, 8) == 0
    assert edge_distance(HexCoord(2, 3), 8, 8) == 3


def test_connection_shape():
    c = HexCoord(0, 0)
    e, w, ne = HexCoord(1, 0), HexCoord(-1, 0), HexCoord(1, -1)
    assert connection_shape(c, w, e) == ("straight", 0)
    assert connection_shape(c, None, ne) == ("straight", 1)
    assert connection_shape(c, None, None) == ("straight", 0)
    assert connection_shape(c, w, ne) == ("corner", 3)
