"""Contains global constants and default values used throughout the project."""

from enums import SeedPattern, WFCUpdateMode


EXAMPLE_TILE_TYPES_PATH: str = "./assets/tile_types/terrain.csv"

# === MODEL CONSTANTS ===

# Possibility sets are fixed-width bitsets, so the number of tile types is capped.
MAX_TILE_TYPES: int = 128
MIN_TILE_TYPES: int = 1

TILEMAP_SIZE_DEFAULT: int = 255
TILEMAP_SIZE_MIN_LIMIT: int = 1
TILEMAP_SIZE_MAX_LIMIT: int = 1000

SEED_PATTERN_DEFAULT: SeedPattern = SeedPattern.LATTICE
SEED_STRIDE_DEFAULT: int = 16
SEED_STRIDE_MIN_LIMIT: int = 1
SEED_STRIDE_MAX_LIMIT: int = 1000

CELL_SIZE_DEFAULT: int = 1

RANDOM_SEED_MAX: int = 999999999

UPDATE_MODE_DEFAULT: WFCUpdateMode = WFCUpdateMode.ON_EVERY_N_STEPS
UPDATE_INTERVAL_DEFAULT: int = 500
UPDATE_INTERVAL_MIN_LIMIT: int = 1
UPDATE_INTERVAL_MAX_LIMIT: int = 100000

# Color of cells that have not been collapsed yet.
UNCOLLAPSED_COLOR: tuple[int, int, int] = (0, 0, 0)

# Terrain palette ordered by elevation (deep water to snow peaks). Every tile type may border itself and the tile types
# directly above and below it in that ordering, which produces smooth elevation bands.
DEFAULT_TILE_TYPES: list[tuple[tuple[int, int, int], int]] = [
    ((0, 0, 200), 0b000000000000011),
    ((0, 0, 215), 0b000000000000111),
    ((0, 0, 230), 0b000000000001110),
    ((0, 0, 255), 0b000000000011100),
    ((230, 230, 0), 0b000000000111000),
    ((255, 255, 0), 0b000000001110000),
    ((0, 255, 0), 0b000000011100000),
    ((0, 220, 0), 0b000000111000000),
    ((0, 200, 0), 0b000001110000000),
    ((0, 120, 0), 0b000011100000000),
    ((0, 100, 0), 0b000111000000000),
    ((100, 100, 100), 0b001110000000000),
    ((120, 120, 120), 0b011100000000000),
    ((230, 230, 230), 0b111000000000000),
    ((255, 255, 255), 0b110000000000000),
]

# === VIEW CONSTANTS ===

PALETTE_SWATCH_SIZE: int = 16

LAYOUT_LEFT_SIDE_MAX_WIDTH: int = 350
LAYOUT_LEFT_SIDE_VBOX_SPACING: int = 20
LAYOUT_GRID_MIDDLE_COLUMN_MIN_WIDTH: int = 20
LAYOUT_GRID_RIGHT_COLUMN_MIN_WIDTH: int = 150
