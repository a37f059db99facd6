from .defaults import DEFAULTS
from .settings import CONFIG_MODULE_ENVVAR, Settings, get_settings, reset_settings

__all__ = [
    "DEFAULTS",
    "CONFIG_MODULE_ENVVAR",
    "Settings",
    "get_settings",
    "reset_settings",
]
