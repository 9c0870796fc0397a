import pytest

from hexmap.biomes import BIOME_PALETTES, Biome, classify_biome, select_base_tile


def test_biome_is_closed_set():
    assert {b.value for b in Biome} == {"desert", "grassland", "badlands", "riverside"}
    assert Biome("desert") is Biome.DESERT
    assert str(Biome.BADLANDS) == "badlands"


@pytest.mark.parametrize("elevation,moisture,expected", [
    (0.5, 0.95, Biome.RIVERSIDE),
    (0.9, 0.80, Biome.RIVERSIDE),
    (0.5, 0.50, Biome.GRASSLAND),
    (0.1, 0.45, Biome.GRASSLAND),
    (0.7, 0.10, Biome.BADLANDS),
    (0.2, 0.10, Biome.DESERT),
    (0.0, 0.0, Biome.DESERT),
    (1.0, 0.0, Biome.BADLANDS),
])
def test_classify_biome_partition(elevation, moisture, expected):
    assert classify_biome(elevation, moisture) is expected


def test_classify_biome_thresholds_are_configurable():
    assert classify_biome(0.5, 0.6, riverside_moisture=0.6) is Biome.RIVERSIDE
    assert classify_biome(0.4, 0.2, badlands_elevation=0.3) is Biome.BADLANDS


def test_select_base_tile_stays_in_palette():
    steps = [i / 20 for i in range(20)]
    for biome in Biome:
        for elevation in steps:
            for moisture in steps + [0.99]:
                for variation in steps:
                    tile = select_base_tile(biome, elevation, moisture, variation)
                    assert tile in BIOME_PALETTES[biome]


def test_select_base_tile_examples():
    assert select_base_tile(Biome.BADLANDS, 0.9, 0.1, 0.9) == "stone-mountain"
    assert select_base_tile(Biome.DESERT, 0.2, 0.1, 0.1) == "sand"
    assert select_base_tile(Biome.GRASSLAND, 0.7, 0.5, 0.1) == "grass-hill"
    assert select_base_tile(Biome.RIVERSIDE, 0.2, 1.0, 0.1) == "water"
