import dataclasses

import pytest

from hexmap import (
    Biome, GeneratorState, HexCoord, HexMapConfig, HexMapGenerator, HexTileData,
    create_hex_map_generator, generate_hex_map, parse_hex_key, summarize,
)
from hexmap.hexgrid import in_region


def _tiles(seed=12345, width=16, height=16, **kw):
    return HexMapGenerator(seed=seed, width=width, height=height, **kw).generate()


def test_tile_count_and_fields_in_range():
    tiles = _tiles()
    assert len(tiles) == 256
    for key, t in tiles.items():
        assert isinstance(t.biome, Biome)
        assert 0 <= t.rotation <= 5
        assert 0.0 <= t.elevation <= 1.0
        assert 0.0 <= t.moisture <= 1.0
        assert t.base_tile
        if t.building is not None:
            assert t.building_site
        if t.river_tile:
            assert t.river_piece is not None
        if t.path_tile:
            assert t.path_piece is not None


def test_keys_match_coords_inside_region():
    tiles = _tiles(width=12, height=9)
    assert len(tiles) == 12 * 9
    for key, t in tiles.items():
        coord = parse_hex_key(key)
        assert coord == t.coord
        assert t.key == key
        assert in_region(coord, 12, 9)


def test_biome_variety():
    biomes = {t.biome for t in _tiles().values()}
    assert len(biomes) >= 2


def test_same_seed_same_map():
    a = _tiles()
    b = _tiles()
    assert list(a) == list(b)
    assert dict(a) == dict(b)


def test_generate_twice_is_stable():
    gen = HexMapGenerator(seed=7, width=10, height=10)
    assert dict(gen.generate()) == dict(gen.generate())


def test_different_seed_changes_map():
    a = _tiles(12345)
    b = _tiles(99999)
    differing = sum(1 for k in a if a[k].biome != b[k].biome or a[k].base_tile != b[k].base_tile)
    assert differing > 0


def test_features_present():
    s = summarize(_tiles())
    assert s["building_sites"] >= 2
    assert s["buildings"] >= 1
    assert s["path_tiles"] > 0
    assert sum(s["biomes"].values()) == s["tiles"] == 256
    assert any(summarize(_tiles(seed))["river_tiles"] > 0 for seed in range(5))


def test_rivers_can_be_disabled():
    tiles = _tiles(river_count=0)
    assert not any(t.river_tile for t in tiles.values())


def test_buildings_sit_on_paths():
    # every site is joined to the network, so a built site is also a path hex
    for t in _tiles().values():
        if t.building_site:
            assert t.path_tile


def test_reseed_and_state():
    gen = HexMapGenerator(seed=1, width=8, height=8)
    assert gen.state is GeneratorState.CONFIGURED
    assert gen.last_map is None

    first = gen.generate()
    assert gen.state is GeneratorState.GENERATED
    assert gen.last_map is first

    gen.reseed(2)
    assert gen.config.seed == 2
    assert gen.state is GeneratorState.CONFIGURED
    assert gen.last_map is first

    second = gen.generate()
    assert gen.state is GeneratorState.GENERATED
    gen.reseed(1)
    assert dict(gen.generate()) == dict(first)
    assert second is not first


def test_negative_seed_is_accepted():
    a = _tiles(-5, width=6, height=6)
    b = _tiles(-5, width=6, height=6)
    assert dict(a) == dict(b)


def test_result_is_read_only():
    tiles = _tiles(width=6, height=6)
    with pytest.raises(TypeError):
        tiles["0,0"] = None
    t = next(iter(tiles.values()))
    with pytest.raises(dataclasses.FrozenInstanceError):
        t.rotation = 3


def test_instances_do_not_share_state():
    a = HexMapGenerator(seed=3, width=8, height=8)
    b = HexMapGenerator(seed=3, width=8, height=8)
    a.generate()
    assert b.last_map is None
    b.reseed(4)
    assert a.config.seed == 3


def test_tile_validation():
    with pytest.raises(ValueError):
        HexTileData(HexCoord(0, 0), Biome.DESERT, "sand", 6, 0.5, 0.5)
    with pytest.raises(ValueError):
        HexTileData(HexCoord(0, 0), Biome.DESERT, "sand", 0, 1.5, 0.5)
    with pytest.raises(ValueError):
        HexTileData(HexCoord(0, 0), Biome.DESERT, "sand", 0, 0.5, 0.5, building="building-farm")
    with pytest.raises(TypeError):
        HexTileData(HexCoord(0, 0), "desert", "sand", 0, 0.5, 0.5)


def test_to_dict_field_names():
    t = HexTileData(HexCoord(2, -1), Biome.GRASSLAND, "grass", 4, 0.25, 0.5,
                    building_site=True, building="building-farm", site_kind="farm")
    d = t.to_dict()
    assert d["coord"] == {"q": 2, "r": -1}
    assert d["biome"] == "grassland"
    assert d["baseTile"] == "grass"
    assert d["buildingSite"] is True
    assert d["building"] == "building-farm"
    assert d["siteKind"] == "farm"
    assert "riverPiece" not in d and "pathPiece" not in d


def test_factories():
    tiles = generate_hex_map(seed=5, width=8, height=8)
    assert 0 < len(tiles) < 100
    gen = create_hex_map_generator(HexMapConfig(seed=5, width=8, height=8))
    assert dict(gen.generate()) == dict(tiles)
    gen = create_hex_map_generator(HexMapConfig(seed=5), width=8, height=8)
    assert gen.config.width == 8 and gen.config.seed == 5
