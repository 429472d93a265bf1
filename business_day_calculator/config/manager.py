"""
Configuration manager for loading and validating settings.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from business_day_calculator.data.schemas import Config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "settings.yaml"

# YAML section -> {YAML key: Config field}
SECTION_MAPPINGS = {
    "holidays": {
        "source": "holiday_source",
        "base_url": "holiday_api_base_url",
        "timeout": "holiday_api_timeout",
        "country": "holiday_country",
        "max_workers": "max_fetch_workers",
    },
    "calendar": {
        "weekend_days": "weekend_days",
        "year_selection": "year_selection",
        "next_year_threshold": "next_year_threshold",
    },
    "api": {
        "host": "api_host",
        "port": "api_port",
    },
}


class ConfigManager:
    """Manages configuration loading from YAML files and environment variables."""

    ENV_PREFIX = "BUSINESS_DAYS_"

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the config manager.

        Args:
            config_path: Optional path to config file. If not provided, uses default.
        """
        self.config_path = str(config_path) if config_path else str(DEFAULT_CONFIG_PATH)

    def load_config(self) -> Config:
        """
        Load configuration from YAML file with environment variable overrides.

        Returns:
            Config: Validated configuration object.

        Raises:
            ValueError: If config is invalid.
        """
        config_dict = self._load_yaml()
        config_dict = self._apply_env_overrides(config_dict)

        try:
            return Config(**config_dict)
        except Exception as e:
            raise ValueError(f"Invalid configuration: {e}")

    def _load_yaml(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        config_path = Path(self.config_path)

        if not config_path.exists():
            logger.debug(f"Config file not found: {config_path}, using defaults")
            return {}

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing YAML config file: {e}")

        logger.debug(f"Loaded config from: {config_path}")
        return self._flatten_config(config) if config else {}

    def _flatten_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Flatten nested YAML config to match Config model fields.

        Args:
            config: Nested configuration dictionary.

        Returns:
            Flattened configuration dictionary.
        """
        result = {}
        for section, keys in SECTION_MAPPINGS.items():
            values = config.get(section) or {}
            for yaml_key, field_name in keys.items():
                if yaml_key in values and values[yaml_key] is not None:
                    result[field_name] = values[yaml_key]
        return result

    def _apply_env_overrides(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Environment variables:
        - BUSINESS_DAYS_HOLIDAY_SOURCE -> holiday_source
        - BUSINESS_DAYS_HOLIDAY_API_URL -> holiday_api_base_url
        - BUSINESS_DAYS_HOLIDAY_API_TIMEOUT -> holiday_api_timeout
        - BUSINESS_DAYS_HOLIDAY_COUNTRY -> holiday_country
        - BUSINESS_DAYS_MAX_FETCH_WORKERS -> max_fetch_workers
        - BUSINESS_DAYS_WEEKEND_DAYS -> weekend_days (comma separated, e.g. "5,6")
        - BUSINESS_DAYS_YEAR_SELECTION -> year_selection
        - BUSINESS_DAYS_NEXT_YEAR_THRESHOLD -> next_year_threshold
        - BUSINESS_DAYS_API_HOST -> api_host
        - BUSINESS_DAYS_API_PORT -> api_port

        Args:
            config_dict: Configuration dictionary from YAML.

        Returns:
            Updated configuration dictionary.
        """
        env_mappings = {
            "HOLIDAY_SOURCE": "holiday_source",
            "HOLIDAY_API_URL": "holiday_api_base_url",
            "HOLIDAY_API_TIMEOUT": ("holiday_api_timeout", float),
            "HOLIDAY_COUNTRY": "holiday_country",
            "MAX_FETCH_WORKERS": ("max_fetch_workers", int),
            "WEEKEND_DAYS": ("weekend_days", self._parse_int_list),
            "YEAR_SELECTION": "year_selection",
            "NEXT_YEAR_THRESHOLD": ("next_year_threshold", int),
            "API_HOST": "api_host",
            "API_PORT": ("api_port", int),
        }

        for suffix, mapping in env_mappings.items():
            env_var = self.ENV_PREFIX + suffix
            env_value = os.environ.get(env_var)
            if env_value is None:
                continue

            if isinstance(mapping, tuple):
                config_key, type_converter = mapping
                try:
                    config_dict[config_key] = type_converter(env_value)
                except ValueError:
                    logger.warning(f"Ignoring invalid value for {env_var}: {env_value!r}")
                    continue
            else:
                config_key = mapping
                config_dict[config_key] = env_value
            logger.debug(f"Override from env: {env_var} -> {config_key}")

        return config_dict

    def _parse_int_list(self, value: str) -> List[int]:
        """Parse a comma separated list of integers."""
        return [int(part) for part in value.split(",") if part.strip()]

    def save_config(self, config: Config, output_path: Optional[str] = None) -> None:
        """
        Save configuration to YAML file.

        Args:
            config: Configuration object to save.
            output_path: Optional output path. If not provided, uses default.
        """
        output_path = output_path or self.config_path

        config_dict = {
            "holidays": {
                "source": config.holiday_source.value,
                "base_url": config.holiday_api_base_url,
                "timeout": config.holiday_api_timeout,
                "country": config.holiday_country,
                "max_workers": config.max_fetch_workers,
            },
            "calendar": {
                "weekend_days": list(config.weekend_days),
                "year_selection": config.year_selection.value,
                "next_year_threshold": config.next_year_threshold,
            },
            "api": {
                "host": config.api_host,
                "port": config.api_port,
            },
        }

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
        logger.info(f"Saved configuration to: {output_path}")
