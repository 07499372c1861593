"""Magic Guard - typo recovery and danger detection for command-line tools."""

__version__ = "0.1.0"

_LAZY = {
    "MagicGuard": "magic_guard.core",
    "MagicConfig": "magic_guard.config",
    "DangerLevel": "magic_guard.danger.analyzer",
    "ReasonTrace": "magic_guard.recovery.commands",
    "similarity": "magic_guard.core",
    "edit_distance": "magic_guard.core",
    "token_overlap": "magic_guard.core",
    "suggest_command": "magic_guard.core",
    "suggest_paths": "magic_guard.core",
    "recover_token": "magic_guard.core",
    "analyze_danger": "magic_guard.core",
    "report_danger": "magic_guard.core",
}


# Lazy imports keep `import magic_guard` cheap for the CLI
def __getattr__(name: str):
    """Lazy import of the public API."""
    if name in _LAZY:
        import importlib
        return getattr(importlib.import_module(_LAZY[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = list(_LAZY)
