"""Root-level pytest fixtures for the pairdb test suite.

Provides shared configuration fixtures following the Pydantic-based
architecture. Tests build configs through these fixtures instead of raw dicts.
"""

import pytest

from pairdb.schemas import ParamConfig, UserConfig, resolve_config
from pairdb.imaging.payload import ImagePayload


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides)."""
    return resolve_config(param_config, None, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.

    Accepts UserConfig-compatible kwargs.

    Examples
    --------
    >>> def test_sqlite(make_config):
    ...     config = make_config(backend="sqlite", batch_size=2)
    ...     assert config.store.batch_size == 2
    """
    def _make(**user_overrides):
        if user_overrides:
            return resolve_config(param_config, UserConfig(**user_overrides), None)
        return resolve_config(param_config, None, None)

    return _make


# =============================================================================
# Builder doubles
# =============================================================================

class FakeBuilder:
    """Image builder double returning fixed-shape raw payloads.

    ``fail`` holds indices that return None; ``sizes`` maps an index to a
    data length that differs from the declared shape.
    """

    def __init__(self, shape=(6, 2, 2), fail=(), sizes=None):
        self.shape = shape
        self.fail = set(fail)
        self.sizes = sizes or {}
        self.calls = []

    def build(self, path_a, path_b, index, key):
        self.calls.append(key)
        if index in self.fail:
            return None
        c, h, w = self.shape
        n = self.sizes.get(index, c * h * w)
        return ImagePayload(channels=c, height=h, width=w, data=bytes(n), label=index, param=key)


@pytest.fixture
def fake_builder():
    """The FakeBuilder class, so tests can construct it with their own options."""
    return FakeBuilder
