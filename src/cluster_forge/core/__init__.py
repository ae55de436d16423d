"""Core configuration exports."""

from .config import (
    CONFIG_FILENAME,
    TEMPLATE_ROOT_ENV,
    ForgeConfig,
    ForgeConfigError,
    load_forge_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "TEMPLATE_ROOT_ENV",
    "ForgeConfig",
    "ForgeConfigError",
    "load_forge_config",
]
