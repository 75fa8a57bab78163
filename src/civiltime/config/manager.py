"""Configuration manager for civiltime.

This module provides functionality for loading, validating, and saving
YAML configuration files with Pydantic model validation.
"""

import logging
import tempfile
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..config.schema import CivilTimeConfig


logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Configuration manager for handling YAML config files with Pydantic validation.

    Configuration is read once at startup; saving is atomic so a crash never
    leaves a half-written file behind.
    """

    @staticmethod
    def load_config(config_path: Path) -> CivilTimeConfig:
        """
        Load and validate configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            CivilTimeConfig: Validated configuration object

        Raises:
            FileNotFoundError: If the config file doesn't exist
            yaml.YAMLError: If the YAML syntax is invalid
            ValueError: If the file does not hold a YAML mapping
            ValidationError: If the configuration fails Pydantic validation
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw_config_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if raw_config_data is None:
            config_data: dict[str, object] = {}
        elif isinstance(raw_config_data, dict):
            config_data = raw_config_data  # pyright: ignore[reportUnknownVariableType]
        else:
            raise ValueError(
                f"Configuration file must contain a YAML dictionary, got {type(raw_config_data).__name__}"
            )

        try:
            config = CivilTimeConfig.model_validate(config_data)
        except ValidationError:
            logger.error(f"Invalid configuration in {config_path}")
            raise

        logger.debug(f"Loaded configuration from {config_path}")
        return config

    @staticmethod
    def save_config(config: CivilTimeConfig, config_path: Path) -> None:
        """
        Save configuration to a YAML file with atomic operation.

        Args:
            config: Configuration object to save
            config_path: Path where to save the configuration

        Raises:
            OSError: If file operations fail
        """
        config_dict = config.model_dump(mode="json")

        content_to_write = yaml.dump(
            config_dict,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            indent=2,
        )

        # Atomic save operation using temporary file
        temp_file = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=config_path.parent,
                prefix=f".{config_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as temp_file:
                _ = temp_file.write(content_to_write)
                temp_file.flush()
                temp_path = Path(temp_file.name)

            _ = temp_path.replace(config_path)

        except Exception as e:
            if temp_file and Path(temp_file.name).exists():
                Path(temp_file.name).unlink(missing_ok=True)
            raise OSError(f"Failed to save configuration to {config_path}: {e}") from e

    @staticmethod
    def get_default_config() -> CivilTimeConfig:
        """
        Get a configuration object with default values.

        Returns:
            CivilTimeConfig: UTC system zone, system zone rules, INFO logging
        """
        return CivilTimeConfig()

    @staticmethod
    def create_sample_config(sample_path: Path) -> None:
        """
        Create a sample configuration file with all options and documentation.

        Args:
            sample_path: Path where to create the sample configuration file
        """
        _ = sample_path.parent.mkdir(parents=True, exist_ok=True)
        _ = sample_path.write_text(ConfigManager._generate_sample_content(), encoding="utf-8")

    @staticmethod
    def _generate_sample_content() -> str:
        return """# civiltime configuration file

time:
  # Zone used when no zone is given: an IANA id (Asia/Singapore) or a fixed offset (UTC+08:00)
  system_time_zone: "UTC"
  # Canonical zoned format of instants stored as text
  default_date_time_format: "yyyy-MM-dd h:mm a Z"

zone_rules:
  # 'system' uses the host tz database, 'tzdata' the packaged IANA database
  source: "system"

logging:
  # DEBUG, INFO, WARNING, ERROR or CRITICAL
  level: "INFO"
  # Optional rotating log file, null for console only
  log_file: null
  max_bytes: 5242880
  backup_count: 5
"""
