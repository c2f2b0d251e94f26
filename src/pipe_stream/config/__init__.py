from .loader import ConfigError, load_config, load_yaml_config, parse_config
from .models import AdapterDecl, AppConfig, LoggingConfig, LogSinkConfig, PipelineConfig

# Config exports are intentionally small.
__all__ = [
    "AdapterDecl",
    "AppConfig",
    "ConfigError",
    "LogSinkConfig",
    "LoggingConfig",
    "PipelineConfig",
    "load_config",
    "load_yaml_config",
    "parse_config",
]
