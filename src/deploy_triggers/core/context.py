# src/deploy_triggers/core/context.py
"""
PlanContext — contexto canônico de um passe de planejamento.

Cada passe de planejamento possui seu próprio contexto, que é o único
meio de registro de:
- eventos estruturados (decisões, hazards, persistência)
- warnings não fatais associados a um recurso derivado

Princípios fundamentais:
- Isolamento por passe (nenhum logger ou estado global compartilhado)
- Eventos sempre incluem `pass_id`, `resource_id` e timestamp UTC
- Hazards de configuração aparecem como warnings, nunca em silêncio
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from deploy_triggers.core.config.hashing import compute_config_hash


@dataclass
class PlanContext:
    """
    Contexto de um passe de planejamento.

    Campos canônicos:
    - pass_id: identificador único do passe
    - created_at: timestamp UTC de criação do contexto
    - config: configuração efetiva (defaults + local deep-merge)
    - events: log estruturado de eventos
    - warnings: warnings por resource_id
    """

    pass_id: str
    created_at: datetime
    config: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    @classmethod
    def new(cls, config: Optional[Dict[str, Any]] = None) -> "PlanContext":
        return cls(
            pass_id=uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            config=dict(config or {}),
        )

    @property
    def config_hash(self) -> str:
        return compute_config_hash(self.config)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, resource_id: Optional[str], level: str, message: str, **extra: Any) -> None:
        event = {
            "pass_id": self.pass_id,
            "resource_id": resource_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, resource_id: str, message: str) -> None:
        if resource_id not in self.warnings:
            self.warnings[resource_id] = []
        self.warnings[resource_id].append(message)

    def events_for(self, resource_id: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("resource_id") == resource_id]
