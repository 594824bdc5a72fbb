GRID_ROWS = 7
GRID_COLS = 7

# Shortest run along one axis that counts as a match.
MIN_RUN_LENGTH = 3

# Seconds an invalid swap stays on screen before it is swapped back.
BAD_SWAP_TIMEOUT = 0.5
TICK_DT = 1 / 60

# Board initialisation retries before giving up on a playable layout.
MAX_LAYOUT_ATTEMPTS = 200

# Tile kind -> presenter colour. Every kind is spawnable by default.
DEFAULT_TILE_TYPES = {
    'ruby':     (180, 60, 60),
    'emerald':  (80, 170, 80),
    'sapphire': (70, 90, 180),
    'topaz':    (200, 190, 80),
    'amethyst': (170, 80, 160),
    'pearl':    (225, 225, 215),
}

# Arcade uses 4 for the right mouse button.
MOUSE_BUTTON_RIGHT = 4
