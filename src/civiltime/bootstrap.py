"""
Startup of the civiltime engine.

``initialize`` is the single step that writes the process-wide state: the
logging handlers, the zone rule provider, the canonical date-time format, the
zone directory and the default time zone. Everything else only reads it.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

from .config.manager import ConfigManager
from .config.schema import CivilTimeConfig, LoggingConfig
from .utils.time.parsing import set_default_date_time_format
from .utils.time.timezone import set_system_time_zone_if_required
from .utils.time.zone_rules import (
    ZoneRuleProvider,
    create_zone_rule_provider,
    get_zone_rule_provider,
    set_zone_rule_provider,
)
from .utils.time.zones import ZoneDirectory, initialize_zone_directory


logger = logging.getLogger(__name__)


def setup_logging(config: LoggingConfig | None = None) -> None:
    """
    Configure console logging and, if requested, a rotating log file.

    The console shows messages at the configured level in a short format;
    the file receives everything from DEBUG up in a detailed format.

    Args:
        config: Logging configuration, defaults to INFO on the console only
    """
    if config is None:
        config = LoggingConfig()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    root_logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    )
    simple_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(config.level)
    console_handler.setFormatter(simple_formatter)
    root_logger.addHandler(console_handler)

    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            config.log_file,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

    logger.debug(f"Logging configured at level {config.level}")


def register_zone_rules(source: str) -> ZoneRuleProvider:
    """
    Make the zone rule source named ``source`` the process-wide provider.

    A provider that cannot be created or cannot report its rule version is
    not installed; the failure is logged and the current provider is kept.

    Returns:
        The provider active after the call
    """
    try:
        provider = create_zone_rule_provider(source)
        version = provider.current_rule_version()
    except Exception as e:
        current = get_zone_rule_provider()
        logger.error(
            f"Failed to register zone rules from '{source}', continuing with {current.name} rules: {e}"
        )
        return current

    _ = set_zone_rule_provider(provider)
    logger.info(f"Registered zone rules version {version} from {provider.name}")
    return provider


def initialize(config: CivilTimeConfig | Path | None = None) -> ZoneDirectory:
    """
    Initialize the engine; call once at process startup.

    Args:
        config: A configuration object, a path to a YAML configuration file,
            or None for the defaults

    Returns:
        The zone directory

    Raises:
        FileNotFoundError: If ``config`` is a path that does not exist
        ZoneRulesError: If a zone named by the configuration or the zone
            directory is unknown to the active rules
    """
    if config is None:
        config = ConfigManager.get_default_config()
    elif isinstance(config, Path):
        config = ConfigManager.load_config(config)

    setup_logging(config.logging)
    provider = register_zone_rules(config.zone_rules.source)

    set_default_date_time_format(config.time.default_date_time_format)
    directory = initialize_zone_directory()

    _ = set_system_time_zone_if_required(provider.get_zone(config.time.system_time_zone))
    logger.info("civiltime initialized")
    return directory
