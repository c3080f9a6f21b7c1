"""Erros canônicos do domínio de Fingerprint.

Cada exceção sabe se converter no payload canônico correspondente
(`core.errors`), para que chamadores possam reportar a falha sem
inspecionar a mensagem.
"""

from __future__ import annotations

from typing import List, Optional

from deploy_triggers.core import errors as payloads


class FingerprintError(Exception):
    """Erro base do domínio de fingerprint."""

    def to_payload(self) -> payloads.TriggerErrorPayload:  # pragma: no cover - sobrescrito
        raise NotImplementedError


class NonDeterministicInputError(FingerprintError):
    """DependencySet contém valor sem serialização canônica (set, NaN, objeto...)."""

    def __init__(self, message: str, *, path: str, value_type: str, reason: str) -> None:
        super().__init__(message)
        self.path = path
        self.value_type = value_type
        self.reason = reason
        self.resource_id: Optional[str] = None

    def to_payload(self) -> payloads.TriggerErrorPayload:
        return payloads.non_deterministic_input(
            path=self.path,
            value_type=self.value_type,
            reason=self.reason,
            resource_id=self.resource_id,
        )


class UnresolvedReferenceError(FingerprintError):
    """ResourceRef/DerivedRef não encontrado no catálogo ou no passe."""

    def __init__(self, reference: str, *, resource_id: Optional[str] = None) -> None:
        super().__init__(f"unresolved trigger reference: {reference}")
        self.reference = reference
        self.resource_id = resource_id

    def to_payload(self) -> payloads.TriggerErrorPayload:
        return payloads.unresolved_reference(reference=self.reference, resource_id=self.resource_id)


class UnsupportedAlgorithmError(FingerprintError):
    """Algoritmo de digest fora de SUPPORTED_ALGORITHMS."""

    def __init__(self, algorithm: str, supported: List[str]) -> None:
        super().__init__(f"unsupported fingerprint algorithm: {algorithm}")
        self.algorithm = algorithm
        self.supported = supported

    def to_payload(self) -> payloads.TriggerErrorPayload:
        return payloads.unsupported_algorithm(algorithm=self.algorithm, supported=self.supported)


class VolatileTriggerHazardError(FingerprintError):
    """Trigger volátil rejeitado pela política `hazards.volatile_inputs: error`."""

    def __init__(self, resource_id: Optional[str], sources: List[str]) -> None:
        super().__init__(
            f"trigger of '{resource_id}' depends on volatile source(s) {sources}; "
            "it would signal recreate on every plan"
        )
        self.resource_id = resource_id
        self.sources = sources

    def to_payload(self) -> payloads.TriggerErrorPayload:
        return payloads.volatile_trigger_hazard(resource_id=self.resource_id, sources=self.sources)
