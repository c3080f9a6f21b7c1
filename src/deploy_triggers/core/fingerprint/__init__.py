"""deploy-triggers — Fingerprint (core).

Componentes canônicos do cálculo de fingerprint:
 - serialização canônica (JSON determinístico)
 - resolução de referências e fontes voláteis
 - digest (sha256 / sha1 / sha512)
 - detecção de hazards de configuração
"""

from .canonical import canonical_bytes, canonical_json, canonical_value_bytes, canonicalize  # noqa: F401
from .errors import (  # noqa: F401
    FingerprintError,
    NonDeterministicInputError,
    UnresolvedReferenceError,
    UnsupportedAlgorithmError,
    VolatileTriggerHazardError,
)
from .hashing import compute_fingerprint  # noqa: F401
from .hazards import VOLATILE_TRIGGER, detect_hazards, volatile_source_names  # noqa: F401
from .resolve import resolve_values  # noqa: F401
