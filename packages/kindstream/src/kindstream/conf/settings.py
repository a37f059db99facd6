"""Process settings for the decoder and registry bootstrap.

Values come from :data:`DEFAULTS`, overlaid by the upper-case names of the
module named in ``$KINDSTREAM_CONFIG_MODULE`` and by direct assignment.
"""

import importlib
import logging
import os
from collections import ChainMap
from typing import Any, Iterator, Mapping, MutableMapping

from .defaults import DEFAULTS

logger = logging.getLogger(__name__)

CONFIG_MODULE_ENVVAR = "KINDSTREAM_CONFIG_MODULE"


class Settings(MutableMapping[str, Any]):
    """Settings overlays in front of the package defaults; writes go to the front."""

    def __init__(self, *overlays: Mapping[str, Any]) -> None:
        self._layers = ChainMap({}, *(dict(o) for o in overlays), dict(DEFAULTS))

    def __getitem__(self, key: str) -> Any:
        return self._layers[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._layers.maps[0][key] = value

    def __delitem__(self, key: str) -> None:
        del self._layers.maps[0][key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._layers)

    def __len__(self) -> int:
        return len(self._layers)

    def load_module(self, module_name: str) -> None:
        """Overlay the known upper-case settings defined by ``module_name``."""
        module = importlib.import_module(module_name)
        for key, value in vars(module).items():
            if not key.isupper():
                continue
            if key not in DEFAULTS:
                logger.warning("Ignoring unknown setting %s in %s", key, module_name)
                continue
            self[key] = value

    def as_dict(self) -> dict[str, Any]:
        return dict(self._layers)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process settings, loading ``$KINDSTREAM_CONFIG_MODULE`` on first use."""
    global _settings
    if _settings is None:
        settings = Settings()
        module_name = os.environ.get(CONFIG_MODULE_ENVVAR)
        if module_name:
            settings.load_module(module_name)
        _settings = settings
    return _settings


def reset_settings() -> None:
    """Drop the cached process settings so the next lookup reloads them."""
    global _settings
    _settings = None
