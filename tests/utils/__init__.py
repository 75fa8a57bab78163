"""
Test utilities package for civiltime tests.

## Available Modules

### test_helpers.py
- `create_temp_config_file()`: Context manager for temporary YAML config files
- `create_temp_directory()`: Context manager for temporary directories
- `assert_config_values_match()`: Compare nested configuration values
- `failing_zone_rule_provider()`: Provider double whose every lookup fails
- `preserve_root_logging()`: Restore root logger handlers after reconfiguring logging
"""

from .test_helpers import (
    assert_config_values_match,
    create_temp_config_file,
    create_temp_directory,
    failing_zone_rule_provider,
    preserve_root_logging,
)

__all__ = [
    "assert_config_values_match",
    "create_temp_config_file",
    "create_temp_directory",
    "failing_zone_rule_provider",
    "preserve_root_logging",
]
