"""deploy-triggers — modelo de dados (core)."""

from .catalog import DuplicateResourceError, ResourceCatalog  # noqa: F401
from .types import (  # noqa: F401
    DIGEST_LENGTHS,
    SUPPORTED_ALGORITHMS,
    VOLATILE_SOURCES,
    Action,
    Clock,
    DependencySet,
    DerivedRef,
    DerivedResource,
    Evaluation,
    Fingerprint,
    Hazard,
    Resource,
    ResourceRef,
    TimestampSource,
    UuidSource,
    VolatileSource,
    utc_now,
)
