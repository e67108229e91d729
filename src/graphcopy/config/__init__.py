"""Configuration module using Pydantic Settings.

Usage:
    from graphcopy.config import CopySettings

    settings = CopySettings(copy_map_keys=False)
"""

from graphcopy.config.settings import CopySettings, CycleStrategy

__all__ = [
    "CopySettings",
    "CycleStrategy",
]
