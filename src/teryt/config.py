import os
from dotenv import load_dotenv

# Pick up TERYT_* settings from a .env file at the root of the project
load_dotenv()


def get_config(key: str) -> str:
    """
    Retrieves a configuration value from the environment.

    The lookup is strict: every key the service reads must be present,
    either in the process environment or in the .env file. A missing key
    raises instead of falling back to a default, so the service never
    starts against an unexpected dataset path.

    Args:
        key: The name of the configuration variable, e.g. TERYT_STREETS_FILE.

    Returns:
        The configuration value as a string.

    Raises:
        ValueError: If the configuration key is not found in the environment.
    """
    value = os.getenv(key)
    if value is None:
        raise ValueError(f"Error: Configuration key '{key}' not found in .env file.")
    return value


def get_int_config(key: str) -> int:
    """Retrieves a configuration value and converts it to an integer."""
    value = get_config(key)
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Error: Configuration key '{key}' must be an integer, got '{value}'.")
