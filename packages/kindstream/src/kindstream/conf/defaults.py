"""Default configuration values for kindstream."""

DEFAULTS: dict[str, object] = {
    # Reader: bytes used to sniff JSON vs YAML, and JSON chunk size.
    "BUFFER_SIZE": 4096,
    # Drop YAML documents that hold nothing (e.g. a leading or trailing ``---``).
    "SKIP_EMPTY_DOCUMENTS": True,
    # Modules exposing ``register_objects(registry)``, called by bootstrap.
    "OBJECT_MODULES": (),
    # Freeze the registry once bootstrap has run every hook.
    "FREEZE_REGISTRY": True,
}
