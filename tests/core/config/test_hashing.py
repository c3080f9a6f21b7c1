# tests/core/config/test_hashing.py
"""
Testes do hashing de configuração.

O hash da configuração efetiva é registrado no event log de cada passe
de planejamento; ele precisa ser determinístico e independente da
ordem das chaves.
"""

import hashlib
import json
from datetime import date

import pytest

from deploy_triggers.core.config import compute_config_hash, load_config, resolve_settings
from deploy_triggers.core.context import PlanContext
from deploy_triggers.core.fingerprint import NonDeterministicInputError


def test_hash_is_deterministic():
    h1 = compute_config_hash({"state": {"path": "s.json"}, "fingerprint": {"algorithm": "sha256"}})
    h2 = compute_config_hash({"fingerprint": {"algorithm": "sha256"}, "state": {"path": "s.json"}})
    assert h1 == h2
    assert len(h1) == 64


def test_hash_matches_sha256_of_canonical_json():
    cfg = {"hazards": {"volatile_inputs": "warn"}, "fingerprint": {"algorithm": "sha1"}}
    canonical = json.dumps(cfg, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    assert compute_config_hash(cfg) == hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def test_hash_changes_on_override():
    assert compute_config_hash({"hazards": {"volatile_inputs": "warn"}}) != compute_config_hash(
        {"hazards": {"volatile_inputs": "error"}}
    )


def test_hash_requires_dict():
    with pytest.raises(TypeError):
        compute_config_hash(["not", "a", "dict"])


def test_hash_accepts_yaml_dates_in_effective_config(tmp_path, config_defaults_yaml):
    defaults = tmp_path / "defaults.yaml"
    local = tmp_path / "local.yaml"
    defaults.write_text(config_defaults_yaml, encoding="utf-8")
    local.write_text("meta:\n  reviewed: 2026-01-16\n", encoding="utf-8")

    cfg = load_config(defaults_path=str(defaults), local_path=str(local))
    settings = resolve_settings(cfg)

    assert cfg["meta"]["reviewed"] == date(2026, 1, 16)
    assert settings.config_hash == compute_config_hash(cfg)
    assert PlanContext.new(cfg).config_hash == settings.config_hash
    assert settings.config_hash != compute_config_hash({**cfg, "meta": {"reviewed": "2026-01-16"}})


def test_hash_rejects_values_without_canonical_form():
    with pytest.raises(NonDeterministicInputError) as exc:
        compute_config_hash({"hazards": {"ignore": {"a", "b"}}})

    assert exc.value.path == "$config.hazards.ignore"
