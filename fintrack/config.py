"""Configuration file management for fintrack."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from fintrack.domain.models import CategoryName, TransactionType
from fintrack.store.schema import get_db_path

DEFAULT_CATEGORIES: dict[str, list[str]] = {
    TransactionType.INCOME.value: ["Job", "Card Payment", "Business", "Other"],
    TransactionType.EXPENSE.value: ["Food", "Shopping", "Subscriptions", "Other"],
}


class ConfigError(Exception):
    """Configuration file is unreadable or malformed."""


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    db_path: Path
    currency_symbol: str = "$"
    log_level: str = "WARNING"
    categories: dict[TransactionType, list[CategoryName]] = field(default_factory=dict)

    def categories_for(self, txn_type: TransactionType) -> list[CategoryName]:
        return self.categories.get(txn_type, [])


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
    return get_xdg_config_home() / "fintrack" / "config.toml"


def default_config() -> dict[str, Any]:
    return {
        "currency_symbol": "$",
        "log_level": "WARNING",
        "categories": {txn_type: list(names) for txn_type, names in DEFAULT_CATEGORIES.items()},
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    save_config(default_config(), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def _parse_categories(raw: Any) -> dict[TransactionType, list[CategoryName]]:
    if not isinstance(raw, dict):
        raise ConfigError("'categories' must be a table of Income/Expense lists")

    categories: dict[TransactionType, list[CategoryName]] = {}
    for txn_type in TransactionType:
        names = raw.get(txn_type.value, DEFAULT_CATEGORIES[txn_type.value])
        if not isinstance(names, list) or not all(isinstance(name, str) for name in names):
            raise ConfigError(f"'categories.{txn_type.value}' must be a list of strings")
        categories[txn_type] = [CategoryName(name) for name in names]
    return categories


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, falling back to defaults when no config file exists.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings with every field populated.

    Raises:
        ConfigError: If the config file exists but is malformed.
    """
    if config_path is None:
        config_path = get_config_path()

    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = default_config()

    database = config.get("database")
    db_path = Path(database).expanduser() if database else get_db_path()

    currency_symbol = config.get("currency_symbol", "$")
    log_level = config.get("log_level", "WARNING")
    if not isinstance(currency_symbol, str) or not isinstance(log_level, str):
        raise ConfigError("'currency_symbol' and 'log_level' must be strings")

    return Settings(
        db_path=db_path,
        currency_symbol=currency_symbol,
        log_level=log_level,
        categories=_parse_categories(config.get("categories", DEFAULT_CATEGORIES)),
    )
