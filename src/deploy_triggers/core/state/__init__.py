"""deploy-triggers — State store de fingerprints."""

from .store import (  # noqa: F401
    STATE_VERSION,
    InMemoryStateStore,
    JsonFileStateStore,
    StateCorruptedError,
    StateEntry,
    StateError,
    StateStore,
)
