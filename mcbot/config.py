import os
from dotenv import load_dotenv

load_dotenv()

def get_env_or_raise(key: str) -> str:
    """Read an environment variable, raising if it is not set."""
    value = os.getenv(key)
    if value is None:
        raise ValueError(f"Environment variable {key} is not set")
    return value

def get_env_or_default(key: str, default: str) -> str:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value

def get_float_env(key: str, default: float) -> float:
    """Read a numeric environment variable, falling back to `default` when unset."""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Environment variable {key} must be a number, got {value!r}")

# DISCORD_TOKEN is only required when the bot actually starts (see bot.main)
COMMAND_PREFIX = get_env_or_default('COMMAND_PREFIX', '.')
LOG_FILE = get_env_or_default('LOG_FILE', 'minecraft_bot.log')

AGGREGATOR_URL = get_env_or_default('AGGREGATOR_URL', 'https://api.mcsrvstat.us/2')
USER_AGENT = get_env_or_default('USER_AGENT', 'mcbot/1.0 (Discord server status bot)')

# Seconds
QUERY_TIMEOUT = get_float_env('QUERY_TIMEOUT', 6.0)
LOOKUP_TIMEOUT = get_float_env('LOOKUP_TIMEOUT', 3.0)
AGGREGATOR_TIMEOUT = get_float_env('AGGREGATOR_TIMEOUT', 10.0)
COMMAND_COOLDOWN = get_float_env('COMMAND_COOLDOWN', 5.0)

JAVA_DEFAULT_PORT = 25565
BEDROCK_DEFAULT_PORT = 19132
PLAYER_SAMPLE_LIMIT = 10

# Scanned top to bottom, first match wins
HOSTING_BRANDS = (
    ('aternos', 'Aternos (free)'),
    ('minehut', 'Minehut'),
    ('shockbyte', 'Shockbyte'),
    ('pebblehost', 'PebbleHost'),
    ('mchost', 'MCHost'),
)

IP_PREFIX_PROVIDERS = (
    ('51.', 'OVH or Hetzner (Europe)'),
    ('104.', 'Cloud Provider / CDN'),
    ('172.', 'Cloud Provider / CDN'),
    ('35.', 'Cloud Provider / CDN'),
)
