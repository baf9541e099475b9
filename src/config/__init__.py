"""Configuration loading for call graph generation."""

from config.settings import (
    AnalyzerConfig,
    ConfigError,
    HttpConfig,
    JavaCGConfig,
    load_config,
)

__all__ = [
    "AnalyzerConfig",
    "ConfigError",
    "HttpConfig",
    "JavaCGConfig",
    "load_config",
]
