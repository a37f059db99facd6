# kindstream/registry/bootstrap.py
"""Explicit, caller-sequenced population of an object registry."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Union

from kindstream.conf import get_settings
from kindstream.exceptions import RegistrationError, RegistryBootstrapError
from kindstream.tracing import span_sync

from .base import ObjectRegistry

logger = logging.getLogger(__name__)

HOOK_NAME = "register_objects"

RegistrationHook = Callable[[ObjectRegistry], Any]
HookLike = Union[str, RegistrationHook]


def load_hook(path: str) -> RegistrationHook:
    """Import ``pkg.module`` (or ``pkg.module:func``) and return its registration hook.

    Without an explicit attribute, the module's ``register_objects`` is used.
    """
    mod_path, _, attr = path.partition(":")
    attr = attr or HOOK_NAME
    try:
        module = importlib.import_module(mod_path)
    except ModuleNotFoundError as exc:
        # Only re-raise as "not found" when the target module itself is missing (not a child import).
        if exc.name == mod_path or mod_path.startswith(f"{exc.name}."):
            raise RegistryBootstrapError(f"Object module '{mod_path}' not found") from exc
        raise

    hook = getattr(module, attr, None)
    if not callable(hook):
        raise RegistryBootstrapError(f"Object module '{mod_path}' has no callable '{attr}'")
    return hook


def bootstrap_registry(
    hooks: Iterable[HookLike] | None = None,
    *,
    settings: Mapping[str, Any] | None = None,
    registry: ObjectRegistry | None = None,
    freeze: bool | None = None,
) -> ObjectRegistry:
    """
    Build (or fill) a registry by running registration hooks in order.

    Hooks are callables taking the registry, or module paths resolved by
    :func:`load_hook`. When ``hooks`` is None, ``settings["OBJECT_MODULES"]`` is used.
    The registry is frozen afterwards unless ``freeze`` (default:
    ``settings["FREEZE_REGISTRY"]``) is false.

    :raises RegistryBootstrapError: if a hook cannot be loaded or a registration fails.
    """
    conf = settings if settings is not None else get_settings()
    if hooks is None:
        hooks = conf["OBJECT_MODULES"]
    if freeze is None:
        freeze = bool(conf["FREEZE_REGISTRY"])
    registry = registry if registry is not None else ObjectRegistry()

    resolved = [load_hook(h) if isinstance(h, str) else h for h in hooks]
    with span_sync("kindstream.registry.bootstrap", attributes={"kindstream.hooks": len(resolved)}):
        for hook in resolved:
            try:
                hook(registry)
            except RegistrationError as err:
                raise RegistryBootstrapError(f"Unable to register object: {err}") from err
        if freeze:
            registry.freeze()

    logger.info(
        "Object registry bootstrapped with %d type(s): %s",
        registry.count(),
        ", ".join(registry.type_names()) or "<none>",
    )
    return registry


__all__ = ["HOOK_NAME", "bootstrap_registry", "load_hook"]
