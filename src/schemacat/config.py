"""Configuration management for schemacat."""

import os
from pathlib import Path
from typing import Any, Dict, Optional
import toml
from pydantic import BaseModel, Field, ConfigDict

TRUE_VALUES = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Settings stored in ~/.schemacat/config.toml."""

    model_config = ConfigDict(
        extra="allow"
    )  # Allow additional fields for extensibility

    catalog_dir: Optional[Path] = Field(
        default=None, description="Catalog root directory (default: <home>/catalog)"
    )
    compare_constraints: bool = Field(
        default=False,
        description="Report primary key, unique and default changes as drift",
    )
    preview_columns: int = Field(
        default=5, ge=1, description="Columns shown per table after a scan"
    )


class Config:
    """Manages schemacat configuration."""

    def __init__(self, home_dir: Optional[Path] = None):
        """Initialize config manager.

        Args:
            home_dir: Path to the schemacat home directory. If None, uses
                SCHEMACAT_HOME env var or ~/.schemacat.
        """
        if home_dir is None:
            env_dir = os.environ.get("SCHEMACAT_HOME")
            if env_dir:
                home_dir = Path(env_dir)

        self.home_dir = Path(home_dir) if home_dir else Path.home() / ".schemacat"
        self.config_path = self.home_dir / "config.toml"
        self._settings: Optional[Settings] = None

    @property
    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

    def load(self) -> Settings:
        """Load configuration from disk, with environment variable overrides."""
        if not self.exists:
            raise FileNotFoundError(f"Config file not found at {self.config_path}")

        with open(self.config_path, "r") as f:
            data = toml.load(f)

        self._apply_env_overrides(data)
        self._settings = Settings(**data)
        return self._settings

    def settings(self) -> Settings:
        """Load configuration, falling back to defaults when no file exists."""
        if self.exists:
            return self.load()

        data: Dict[str, Any] = {}
        self._apply_env_overrides(data)
        self._settings = Settings(**data)
        return self._settings

    def _apply_env_overrides(self, data: Dict[str, Any]) -> None:
        """Apply environment variable overrides to configuration data."""
        if env_catalog := os.environ.get("SCHEMACAT_CATALOG_DIR"):
            data["catalog_dir"] = env_catalog

        env_compare = os.environ.get("SCHEMACAT_COMPARE_CONSTRAINTS")
        if env_compare is not None:
            data["compare_constraints"] = env_compare.strip().lower() in TRUE_VALUES

    def catalog_root(self, settings: Optional[Settings] = None) -> Path:
        """Resolve the catalog root directory.

        Args:
            settings: Settings to use. If None, loads them.

        Returns:
            Configured catalog directory, else <home>/catalog
        """
        settings = settings or self.settings()
        if settings.catalog_dir:
            return Path(settings.catalog_dir).expanduser()
        return self.home_dir / "catalog"

    def save(self, settings: Optional[Settings] = None) -> None:
        """Save configuration to disk.

        Args:
            settings: Settings to save. If None, saves current settings.
        """
        if settings:
            self._settings = settings

        if not self._settings:
            raise ValueError("No configuration to save")

        self.home_dir.mkdir(parents=True, exist_ok=True)

        config_dict = self._settings.model_dump(mode="json", exclude_none=True)
        with open(self.config_path, "w") as f:
            toml.dump(config_dict, f)

    def init(self) -> Settings:
        """Write a default configuration file.

        Raises:
            FileExistsError: If the config file already exists
        """
        if self.exists:
            raise FileExistsError(f"Config file already exists at {self.config_path}")

        settings = Settings()
        self.save(settings)
        return settings
