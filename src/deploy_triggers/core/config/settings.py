"""Settings tipados a partir da configuração efetiva.

O loader devolve um `dict` puro; este módulo valida as chaves usadas pelo
core e as materializa em um dataclass imutável.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from deploy_triggers.core.model.types import SUPPORTED_ALGORITHMS

from .errors import InvalidSettingsError
from .hashing import compute_config_hash


HAZARD_POLICIES = ("warn", "error")


def _is_non_empty_str(x: Any) -> bool:
    return isinstance(x, str) and bool(x.strip())


def _expect(cond: bool, msg: str) -> None:
    if not cond:
        raise InvalidSettingsError(msg)


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = config.get(name)
    if value is None:
        return {}
    _expect(isinstance(value, dict), f"{name} must be a mapping")
    return value


@dataclass(frozen=True)
class Settings:
    """Representação validada da configuração efetiva."""

    algorithm: str = "sha256"
    volatile_inputs: str = "warn"
    state_path: str = ".deploy-triggers/state.json"
    config_hash: str = ""

    @property
    def fail_on_volatile(self) -> bool:
        return self.volatile_inputs == "error"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fingerprint": {"algorithm": self.algorithm},
            "hazards": {"volatile_inputs": self.volatile_inputs},
            "state": {"path": self.state_path},
        }


def resolve_settings(config: Dict[str, Any]) -> Settings:
    """Valida e materializa `Settings` a partir do dict resolvido."""
    _expect(isinstance(config, dict), "config must be a mapping/dict")

    algorithm = _section(config, "fingerprint").get("algorithm", "sha256")
    _expect(_is_non_empty_str(algorithm), "fingerprint.algorithm is required")
    algorithm = str(algorithm).lower()
    _expect(
        algorithm in SUPPORTED_ALGORITHMS,
        f"fingerprint.algorithm must be one of {sorted(SUPPORTED_ALGORITHMS)}",
    )

    policy = _section(config, "hazards").get("volatile_inputs", "warn")
    _expect(policy in HAZARD_POLICIES, f"hazards.volatile_inputs must be one of {HAZARD_POLICIES}")

    state_path = _section(config, "state").get("path", ".deploy-triggers/state.json")
    _expect(_is_non_empty_str(state_path), "state.path must be a non-empty string")

    return Settings(
        algorithm=algorithm,
        volatile_inputs=policy,
        state_path=str(state_path),
        config_hash=compute_config_hash(config),
    )
