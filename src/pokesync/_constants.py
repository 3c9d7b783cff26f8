"""Internal constants shared across the library."""

BASE_URL = "http://localhost:3005"
DEFAULT_PORT = 3005
USER_AGENT = "pokesync/0.1"

#: Seconds between two scheduled poll cycles.
DEFAULT_POLL_INTERVAL: float = 5.0
DEFAULT_REQUEST_TIMEOUT: float = 10.0

ENTITIES_PATH = "/entities"
POWER_PATH_TEMPLATE = "/entities/{entity_id}/power"

POKEAPI_URL = "https://pokeapi.co/api/v2/pokemon/{entity_id}"
DEFAULT_SEED_IDS: tuple[int, ...] = (1, 4, 7, 25, 39)

# Seeded power levels are drawn from [0, POWER_LEVEL_SEED_MAX).
POWER_LEVEL_SEED_MAX = 100
POWER_LEVEL_MIN = 0

NOT_FOUND_MESSAGE = "Pokémon not found"
UPDATE_FAILED_MESSAGE = "Failed to update power level. Please try again."
