"""Configuration loader for supplier invoice profiles.

This module loads and validates supplier profiles and engine settings
from a YAML file, providing a cached interface for building the
profile registry.
"""

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from invoice_extract.config.profile_registry import ProfileRegistry
from invoice_extract.models.profile import EngineSettings, ProfileConfiguration
from invoice_extract.utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_PROFILES_PATH = Path(__file__).parent / "profiles.yaml"


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""


class ConfigLoader:
    """Loads and manages supplier profile configuration."""

    def __init__(self, config_file: Path | str = DEFAULT_PROFILES_PATH):
        """Initialize the config loader.

        Args:
            config_file: YAML file holding the ``settings`` block and the
                ordered ``profiles`` list
        """
        self.config_file = Path(config_file)
        if not self.config_file.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {self.config_file}"
            )

    @lru_cache(maxsize=10)
    def load_configuration(self) -> ProfileConfiguration:
        """Load and validate the whole profile configuration file."""
        logger.info(
            "Loading profile configuration",
            extra={"config_file": str(self.config_file)},
        )

        try:
            with self.config_file.open("r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}

            configuration = ProfileConfiguration.model_validate(config_data)
            logger.info(
                "Successfully loaded profile configuration",
                extra={"profiles": [p.code for p in configuration.profiles]},
            )
            return configuration

        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Failed to parse YAML configuration '{self.config_file}': {e}"
            ) from e
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid profile configuration '{self.config_file}': {e}"
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Unable to read configuration '{self.config_file}': {e}"
            ) from e

    def load_registry(self) -> ProfileRegistry:
        """Build a profile registry in the order profiles are declared."""
        return ProfileRegistry(self.load_configuration().profiles)

    def load_settings(self) -> EngineSettings:
        return self.load_configuration().settings

    def list_available_suppliers(self) -> list[str]:
        """List supplier codes in registry (detection) order.

        Returns:
            List of supplier codes (e.g., ['medis', 'transpharm'])
        """
        codes = [p.code for p in self.load_configuration().profiles]
        logger.debug("Available supplier profiles", extra={"suppliers": codes})
        return codes

    def clear_cache(self) -> None:
        self.load_configuration.cache_clear()
        logger.info("Configuration cache cleared")


def load_default_registry() -> ProfileRegistry:
    """Build a registry from the profiles bundled with the package."""
    return ConfigLoader().load_registry()
