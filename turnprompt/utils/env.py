"""
Environment utility module for reading typed configuration from environment variables.
"""

import os
from typing import Optional, Union


def get_env_var(
    var_name: str,
    var_type: type = str,
    default: Optional[Union[str, int, float, bool]] = None,
) -> Union[str, int, float, bool]:
    """Get the environment variable converted to var_type.

    Raises:
        ValueError: If the variable is missing without a default, or cannot be
            converted to var_type.
    """
    value = os.getenv(var_name)
    if value is None:
        if default is not None:
            return default
        raise ValueError(f"Environment variable '{var_name}' is not set and has no default.")

    if var_type is bool:
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
        raise ValueError(f"Cannot convert '{value}' to bool.")
    try:
        return var_type(value)
    except ValueError as e:
        raise ValueError(f"Cannot convert '{value}' to {var_type.__name__}.") from e
