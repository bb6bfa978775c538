"""Configuration package for runtime settings and startup validation."""

from .settings import (
    ENV_PREFIX,
    ConfigLayer,
    ConfigSourcePaths,
    ExporterSettings,
    SettingsLoadError,
    config_build_source_paths,
    config_describe_sources,
    config_load_settings,
    config_merge_layers,
    config_read_layers,
)

__all__ = [
    "ENV_PREFIX",
    "ConfigLayer",
    "ConfigSourcePaths",
    "ExporterSettings",
    "SettingsLoadError",
    "config_build_source_paths",
    "config_describe_sources",
    "config_load_settings",
    "config_merge_layers",
    "config_read_layers",
]
