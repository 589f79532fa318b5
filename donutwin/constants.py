"""Constants and type definitions for the DonutWin fairness engine."""

import re
from typing import Literal

# Type definitions
GameKind = Literal["crash", "mines"]
RoundStatus = Literal["active", "ended"]

# Seed material
SERVER_SEED_BYTES = 32
CLIENT_SEED_BYTES = 16
CLIENT_SEED_MAX_LEN = 64
SEED_SEPARATOR = ":"
SERVER_SEED_RE = re.compile(r"^[0-9a-f]{64}$")
DIGEST_HEX_LEN = 64

# Crash: 13 hex chars = 52 bits, the double mantissa width
CRASH_HEX_CHARS = 13
CRASH_SPAN = 1 << (4 * CRASH_HEX_CHARS)
CRASH_DEFAULT_BASE = 100
CRASH_DEFAULT_MAX_POINT = 1_000_000

# House edge is carried in basis points so the transform stays integral
EDGE_SCALE = 10_000

# Ended rounds kept per player for the history view
ROUND_HISTORY_LIMIT = 20

# Mines
MINES_SLICE_CHARS = 2
MINES_DEFAULT_GRID = 25
MINES_MAX_GRID = 256
MAX_EXTENSION_ROUNDS = 64

# Credits
STARTING_BALANCE = 1000
