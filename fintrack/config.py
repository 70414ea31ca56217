from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from fintrack.errors import ConfigError
from fintrack.formatting import CURRENCIES
from fintrack.notifier import DEFAULT_WINDOW_DAYS
from fintrack.periods import PAYOUT_DAYS, PERIODS

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_SETTINGS_PATH = REPO_ROOT / "config" / "settings.yaml"
LOG_LEVEL_ENV = "FINTRACK_LOG_LEVEL"


@dataclass(frozen=True)
class NotificationSettings:
    window_days: int = DEFAULT_WINDOW_DAYS


@dataclass(frozen=True)
class SalarySettings:
    payout_days: Dict[int, int] = field(default_factory=lambda: dict(PAYOUT_DAYS))


@dataclass(frozen=True)
class DashboardSettings:
    recent_limit: int = 5


@dataclass(frozen=True)
class Settings:
    currency: str = "rub"
    log_level: str = "INFO"
    seed_path: Optional[Path] = None
    notifications: NotificationSettings = field(default_factory=NotificationSettings)
    salary: SalarySettings = field(default_factory=SalarySettings)
    dashboard: DashboardSettings = field(default_factory=DashboardSettings)


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return value


def _non_negative_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"'{name}' must be a non-negative integer, got {value!r}")
    return value


def _payout_days(raw: Dict[Any, Any]) -> Dict[int, int]:
    days = dict(PAYOUT_DAYS)
    for key, value in raw.items():
        try:
            period = int(key)
        except (TypeError, ValueError):
            raise ConfigError(f"Unknown salary period {key!r}") from None
        if period not in PERIODS:
            raise ConfigError(f"Unknown salary period {key!r}")
        day = _non_negative_int(value, f"salary.payout_days.{key}")
        if not 1 <= day <= 31:
            raise ConfigError(f"Payout day for period {period} must be between 1 and 31")
        days[period] = day
    return days


def parse_settings(data: Dict[str, Any], base_dir: Path = DEFAULT_SETTINGS_PATH.parent) -> Settings:
    """Build Settings from a parsed YAML mapping; missing keys keep defaults.

    A relative ``seed_path`` is resolved against ``base_dir``, the directory
    holding the settings file.
    """
    if not isinstance(data, dict):
        raise ConfigError("Settings must be a mapping")

    currency = str(data.get("currency", "rub")).lower()
    if currency not in CURRENCIES:
        raise ConfigError(f"Unsupported currency {currency!r}")

    log_level = (os.getenv(LOG_LEVEL_ENV) or str(data.get("log_level", "INFO"))).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"Unknown log level {log_level!r}")

    seed_path = data.get("seed_path")
    if seed_path is not None:
        seed_path = Path(seed_path)
        if not seed_path.is_absolute():
            seed_path = base_dir / seed_path

    notifications = _section(data, "notifications")
    salary = _section(data, "salary")
    dashboard = _section(data, "dashboard")

    return Settings(
        currency=currency,
        log_level=log_level,
        seed_path=seed_path,
        notifications=NotificationSettings(
            window_days=_non_negative_int(
                notifications.get("window_days", DEFAULT_WINDOW_DAYS), "notifications.window_days"
            )
        ),
        salary=SalarySettings(payout_days=_payout_days(_section(salary, "payout_days"))),
        dashboard=DashboardSettings(
            recent_limit=_non_negative_int(dashboard.get("recent_limit", 5), "dashboard.recent_limit")
        ),
    )


def load_settings(path: Union[str, Path, None] = None) -> Settings:
    """Load settings.yaml.

    With no path the repository's config/settings.yaml is used and defaults
    apply when it is absent. An explicit path that does not exist is an error.
    """
    if path is None:
        path = DEFAULT_SETTINGS_PATH
        if not path.exists():
            logger.info("No %s, using default settings", path)
            return Settings()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing settings file {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e

    settings = parse_settings(data, base_dir=path.parent)
    logger.info("Loaded settings from %s (currency=%s)", path, settings.currency)
    return settings
