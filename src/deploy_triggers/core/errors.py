"""
deploy-triggers — Canonical Error Structures (v1)

Este módulo define o padrão canônico de payloads de erro do deploy-triggers.
Erros de avaliação fazem parte do contrato operacional da biblioteca e
devem ser:

- explícitos
- serializáveis
- acionáveis

Nenhum fallback silencioso é permitido.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TriggerErrorPayload:
    """
    Payload canônico de erro do deploy-triggers.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    - decision_required: indica se o plano está bloqueado aguardando decisão humana
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None
    decision_required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

NON_DETERMINISTIC_INPUT = "NON_DETERMINISTIC_INPUT"
UNRESOLVED_REFERENCE = "UNRESOLVED_REFERENCE"
UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"
VOLATILE_TRIGGER_HAZARD = "VOLATILE_TRIGGER_HAZARD"
STATE_CORRUPTED = "STATE_CORRUPTED"
PLAN_CONFIGURATION_ERROR = "PLAN_CONFIGURATION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def non_deterministic_input(
    *,
    path: str,
    value_type: str,
    reason: str,
    resource_id: Optional[str] = None,
    hint: str = "Substitua o valor por uma estrutura ordenada (lista, dict com chaves string) ou por um literal estável.",
) -> TriggerErrorPayload:
    return TriggerErrorPayload(
        type=NON_DETERMINISTIC_INPUT,
        message="Dependência não pode ser serializada de forma canônica",
        details={
            "path": path,
            "value_type": value_type,
            "reason": reason,
            "resource_id": resource_id,
        },
        hint=hint,
    )


def unresolved_reference(
    *,
    reference: str,
    resource_id: Optional[str] = None,
    hint: str = "Declare o recurso referenciado nas definições ou corrija o endereço do trigger.",
) -> TriggerErrorPayload:
    return TriggerErrorPayload(
        type=UNRESOLVED_REFERENCE,
        message="Referência de trigger não encontrada",
        details={"reference": reference, "resource_id": resource_id},
        hint=hint,
    )


def unsupported_algorithm(
    *,
    algorithm: str,
    supported: List[str],
    hint: str = "Ajuste fingerprint.algorithm na configuração.",
) -> TriggerErrorPayload:
    return TriggerErrorPayload(
        type=UNSUPPORTED_ALGORITHM,
        message="Algoritmo de fingerprint não suportado",
        details={"algorithm": algorithm, "supported": supported},
        hint=hint,
    )


def volatile_trigger_hazard(
    *,
    resource_id: Optional[str],
    sources: List[str],
    hint: str = "Remova fontes voláteis (timestamp, uuid) dos triggers; use os ids/atributos das dependências reais.",
) -> TriggerErrorPayload:
    return TriggerErrorPayload(
        type=VOLATILE_TRIGGER_HAZARD,
        message="Trigger depende de valor volátil e sempre sinalizará recreate",
        details={"resource_id": resource_id, "sources": sources},
        hint=hint,
        decision_required=True,
    )


def state_corrupted(
    *,
    path: str,
    reason: str,
    hint: str = "Restaure o arquivo de estado a partir de um backup ou remova-o para forçar a recriação de todos os recursos derivados.",
) -> TriggerErrorPayload:
    return TriggerErrorPayload(
        type=STATE_CORRUPTED,
        message="Arquivo de estado de fingerprints inválido",
        details={"path": path, "reason": reason},
        hint=hint,
        decision_required=True,
    )


def plan_configuration_error(
    *,
    message: str = "Definições inválidas para o passe de planejamento",
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Revise depends_on e os triggers `derived` das definições antes de replanejar.",
) -> TriggerErrorPayload:
    return TriggerErrorPayload(
        type=PLAN_CONFIGURATION_ERROR,
        message=message,
        details=details or {},
        hint=hint,
    )
