"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for the copy engine.

Usage:
    from graphcopy.config import CopySettings

    # Load from environment variables (GRAPHCOPY_*)
    settings = CopySettings()

    # Or override with explicit values
    settings = CopySettings(cycle_strategy="identity")
"""

from __future__ import annotations

from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class CycleStrategy(str, Enum):
    """How the engine guards against cycles in the source graph."""

    PARENT = "parent"
    """Redirect references to the immediate parent only (one-hop cycles)."""

    IDENTITY = "identity"
    """Memoize copies by source identity: every node is copied once per top-level call."""


class CopySettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the graph copy engine.

    Attributes:
        cycle_strategy: Back-reference handling, see CycleStrategy.
        copy_map_keys: Run mapping keys through the copy policy. When False,
            keys are shared with the source mapping and only values are copied.

    Environment Variables:
        GRAPHCOPY_CYCLE_STRATEGY
        GRAPHCOPY_COPY_MAP_KEYS
    """

    model_config = SettingsConfigDict(
        env_prefix="GRAPHCOPY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    cycle_strategy: CycleStrategy = CycleStrategy.PARENT
    copy_map_keys: bool = True
