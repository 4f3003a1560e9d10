"""Configuration file management for yoy."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from yoy.domain.analysis import CategoryOrder
from yoy.domain.errors import ConfigurationError
from yoy.domain.generate import DEFAULT_CATEGORIES


@dataclass(frozen=True)
class Settings:
    """Effective settings after merging the config file over defaults."""

    order: CategoryOrder = CategoryOrder.FIRST_SEEN
    decimals: int = 2
    rows: int = 1000
    start_year: int = 2010
    end_year: int = 2024
    categories: tuple[str, ...] = DEFAULT_CATEGORIES


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "yoy" / "config.toml"


def default_config() -> dict[str, Any]:
    """Build the default configuration document."""
    defaults = Settings()
    return {
        "analysis": {
            "order": defaults.order.value,
            "decimals": defaults.decimals,
        },
        "generate": {
            "rows": defaults.rows,
            "start_year": defaults.start_year,
            "end_year": defaults.end_year,
            "categories": list(defaults.categories),
        },
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(default_config(), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigurationError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def _int_setting(section: dict[str, Any], key: str, default: int, minimum: int) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigurationError(f"'{key}' must be an integer >= {minimum}, got {value!r}")
    return value


def settings_from_config(config: dict[str, Any]) -> Settings:
    """Validate a configuration dictionary and merge it over defaults.

    Args:
        config: Configuration dictionary (may be partial).

    Returns:
        Settings.

    Raises:
        ConfigurationError: If a value has the wrong type or range.
    """
    defaults = Settings()
    analysis = config.get("analysis", {})
    generate = config.get("generate", {})
    if not isinstance(analysis, dict) or not isinstance(generate, dict):
        raise ConfigurationError("'analysis' and 'generate' must be tables")

    try:
        order = CategoryOrder(analysis.get("order", defaults.order.value))
    except ValueError as e:
        choices = ", ".join(o.value for o in CategoryOrder)
        raise ConfigurationError(f"'order' must be one of {choices}, got {analysis.get('order')!r}") from e

    categories = generate.get("categories", list(defaults.categories))
    if not categories or not all(isinstance(c, str) and c.strip() for c in categories):
        raise ConfigurationError("'categories' must be a non-empty list of names")

    start_year = _int_setting(generate, "start_year", defaults.start_year, 1)
    end_year = _int_setting(generate, "end_year", defaults.end_year, 1)
    if start_year > end_year:
        raise ConfigurationError(f"'start_year' {start_year} is after 'end_year' {end_year}")

    return Settings(
        order=order,
        decimals=_int_setting(analysis, "decimals", defaults.decimals, 0),
        rows=_int_setting(generate, "rows", defaults.rows, 0),
        start_year=start_year,
        end_year=end_year,
        categories=tuple(categories),
    )


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, using defaults when no config file exists.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings.

    Raises:
        ConfigurationError: If the config file is invalid.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return Settings()
    return settings_from_config(config)
