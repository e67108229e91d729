"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from graphcopy import CopySettings, CycleStrategy, GraphCopyEngine
from graphcopy.core.copyable import CopyableRegistry


@pytest.fixture
def registry():
    """Fresh CopyableRegistry instance."""
    return CopyableRegistry()


@pytest.fixture
def engine():
    """Engine with the one-level parent guard."""
    return GraphCopyEngine(settings=CopySettings(cycle_strategy=CycleStrategy.PARENT))


@pytest.fixture
def identity_engine():
    """Engine memoizing copies by source identity."""
    return GraphCopyEngine(settings=CopySettings(cycle_strategy=CycleStrategy.IDENTITY))
