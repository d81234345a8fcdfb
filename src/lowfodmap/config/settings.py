"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from lowfodmap.optimizer.models import DEFAULT_DAILY_CALORIE_GOAL, OptimizerSettings


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".lowfodmap"


@dataclass
class CatalogConfig:
    """Food catalog configuration."""

    path: Optional[Path] = None  # None uses the bundled sample catalog


@dataclass
class PlanningConfig:
    """Weekly planning configuration."""

    daily_calorie_goal: float = DEFAULT_DAILY_CALORIE_GOAL
    preferences_path: Optional[Path] = None


@dataclass
class SearchConfig:
    """Fuzzy search configuration."""

    limit: int = 5
    min_score: float = 0.4


@dataclass
class ShuffleConfig:
    """Random meal shuffle configuration."""

    soup_probability: float = 0.4


@dataclass
class Settings:
    """Main application settings."""

    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    planning: PlanningConfig = field(default_factory=PlanningConfig)
    optimizer: OptimizerSettings = field(default_factory=OptimizerSettings)
    search: SearchConfig = field(default_factory=SearchConfig)
    shuffle: ShuffleConfig = field(default_factory=ShuffleConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.lowfodmap/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        # Parse catalog config
        if "catalog" in data:
            catalog_data = data["catalog"] or {}
            if catalog_data.get("path"):
                settings.catalog.path = Path(catalog_data["path"]).expanduser()

        # Parse planning config
        if "planning" in data:
            plan_data = data["planning"] or {}
            if "daily_calorie_goal" in plan_data:
                settings.planning.daily_calorie_goal = float(plan_data["daily_calorie_goal"])
            if plan_data.get("preferences_path"):
                settings.planning.preferences_path = Path(
                    plan_data["preferences_path"]
                ).expanduser()

        # Parse optimizer config
        if "optimizer" in data:
            opt_data = data["optimizer"] or {}
            if "max_iterations" in opt_data:
                settings.optimizer.max_iterations = int(opt_data["max_iterations"])
            if "calorie_tolerance" in opt_data:
                settings.optimizer.calorie_tolerance = float(opt_data["calorie_tolerance"])
            if "reduction_step" in opt_data:
                settings.optimizer.reduction_step = float(opt_data["reduction_step"])
            if "overload_threshold" in opt_data:
                settings.optimizer.overload_threshold = float(opt_data["overload_threshold"])
            if "round_each_step" in opt_data:
                settings.optimizer.round_each_step = bool(opt_data["round_each_step"])

        # Parse search config
        if "search" in data:
            search_data = data["search"] or {}
            if "limit" in search_data:
                settings.search.limit = int(search_data["limit"])
            if "min_score" in search_data:
                settings.search.min_score = float(search_data["min_score"])

        # Parse shuffle config
        if "shuffle" in data:
            shuffle_data = data["shuffle"] or {}
            if "soup_probability" in shuffle_data:
                settings.shuffle.soup_probability = float(shuffle_data["soup_probability"])

        return settings

    def to_dict(self) -> dict:
        return {
            "catalog": {
                "path": str(self.catalog.path) if self.catalog.path else None,
            },
            "planning": {
                "daily_calorie_goal": self.planning.daily_calorie_goal,
                "preferences_path": (
                    str(self.planning.preferences_path)
                    if self.planning.preferences_path
                    else None
                ),
            },
            "optimizer": {
                "max_iterations": self.optimizer.max_iterations,
                "calorie_tolerance": self.optimizer.calorie_tolerance,
                "reduction_step": self.optimizer.reduction_step,
                "overload_threshold": self.optimizer.overload_threshold,
                "round_each_step": self.optimizer.round_each_step,
            },
            "search": {
                "limit": self.search.limit,
                "min_score": self.search.min_score,
            },
            "shuffle": {
                "soup_probability": self.shuffle.soup_probability,
            },
        }

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.lowfodmap/config.yaml
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings
