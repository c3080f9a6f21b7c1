# tests/core/definitions/test_definitions_loader.py
"""
Testes do carregamento e validação das definições declarativas.

Os testes asseguram que:
- YAML e JSON produzem as mesmas definições
- referências `<endereço>.<atributo>` e `<endereço>` são resolvidas contra o catálogo
- estruturas inválidas são rejeitadas com erros explícitos
"""

import json

import pytest
import yaml

from deploy_triggers.core.definitions import (
    DefinitionsFileNotFoundError,
    DefinitionsParseError,
    DefinitionsValidationError,
    UnsupportedDefinitionsFormatError,
    load_definitions,
    validate_definitions,
)
from deploy_triggers.core.fingerprint import compute_fingerprint
from deploy_triggers.core.model import DerivedRef, ResourceRef, TimestampSource


def test_load_yaml_definitions(definitions_path):
    defs = load_definitions(definitions_path)

    assert len(defs.catalog) == 3
    deployment = defs.get_derived("aws_api_gateway_deployment.main")
    assert deployment.kind == "deployment"
    assert deployment.triggers.values[0] == ResourceRef("aws_api_gateway_resource.users", "id")

    stage = defs.get_derived("aws_api_gateway_stage.prod")
    assert stage.depends_on == ("aws_api_gateway_deployment.main",)
    assert stage.triggers.values == (DerivedRef("aws_api_gateway_deployment.main"), "prod")


def test_json_definitions_are_equivalent(tmp_path, definitions_yaml, definitions_path):
    p = tmp_path / "definitions.json"
    p.write_text(json.dumps(yaml.safe_load(definitions_yaml)), encoding="utf-8")

    assert load_definitions(p).derived == load_definitions(definitions_path).derived


def test_whole_resource_ref_and_sources():
    defs = validate_definitions(
        {
            "resources": [{"address": "aws_api_gateway_rest_api.api", "attributes": {"id": "a1"}}],
            "derived": [
                {
                    "id": "dep",
                    "triggers": [{"ref": "aws_api_gateway_rest_api.api"}, {"source": "timestamp"}],
                }
            ],
        }
    )

    (dep,) = defs.derived
    assert dep.triggers.values == (ResourceRef("aws_api_gateway_rest_api.api"), TimestampSource())


def test_missing_file(tmp_path):
    with pytest.raises(DefinitionsFileNotFoundError):
        load_definitions(tmp_path / "nope.yaml")


def test_unsupported_format(tmp_path):
    p = tmp_path / "definitions.toml"
    p.write_text("x = 1", encoding="utf-8")
    with pytest.raises(UnsupportedDefinitionsFormatError):
        load_definitions(p)


@pytest.mark.parametrize("content", ["", "- a\n- b\n", "derived: [unclosed"])
def test_parse_errors(tmp_path, content):
    p = tmp_path / "definitions.yaml"
    p.write_text(content, encoding="utf-8")
    with pytest.raises(DefinitionsParseError):
        load_definitions(p)


def _one(triggers, **extra):
    derived = {"id": "dep", "triggers": triggers}
    derived.update(extra)
    return {
        "resources": [{"address": "aws_api_gateway_method.get", "attributes": {"id": "m1"}}],
        "derived": [derived],
    }


@pytest.mark.parametrize(
    "data",
    [
        {"derived": []},
        _one([]),
        _one([{"ref": "aws_api_gateway_method.unknown.id"}]),
        _one([{"source": "random"}]),
        _one([{"value": 1, "ref": "aws_api_gateway_method.get"}]),
        _one([{"derived": "other"}]),
        _one([{"value": 1}], depends_on=["other"]),
        {
            "resources": [{"address": "a.b"}, {"address": "a.b"}],
            "derived": [{"id": "dep", "triggers": [{"value": 1}]}],
        },
        {
            "derived": [
                {"id": "dep", "triggers": [{"value": 1}]},
                {"id": "dep", "triggers": [{"value": 2}]},
            ]
        },
    ],
)
def test_invalid_definitions_are_rejected(data):
    with pytest.raises(DefinitionsValidationError):
        validate_definitions(data)


def test_unquoted_yaml_date_value_is_fingerprinted_apart_from_quoted_text():
    def _derived(literal):
        data = yaml.safe_load(f"derived:\n  - id: deployment.main\n    triggers:\n      - value: {literal}\n")
        return validate_definitions(data).get_derived("deployment.main")

    unquoted = _derived("2026-01-16")
    quoted = _derived('"2026-01-16"')

    assert unquoted.triggers.values != quoted.triggers.values
    assert compute_fingerprint(unquoted.triggers) != compute_fingerprint(quoted.triggers)
