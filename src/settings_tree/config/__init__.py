from .models import LoggingConfig, OutputConfig, SchemaAppConfig
from .loader import ConfigError, load_config, load_default_table, load_yaml_config

__all__ = [
    "ConfigError",
    "LoggingConfig",
    "OutputConfig",
    "SchemaAppConfig",
    "load_config",
    "load_default_table",
    "load_yaml_config",
]
