# tests/conftest.py
"""
Fixtures compartilhados para testes do deploy-triggers.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações YAML mínimas (defaults + local)
- um relógio controlado para fontes voláteis
- um catálogo de recursos no formato do exemplo de API Gateway
- definições declarativas (deployment + stage)

Invariantes:
    - Nenhuma fixture depende do relógio real
    - Fixtures de arquivo escrevem apenas em `tmp_path`
"""

from datetime import datetime, timedelta, timezone

import pytest


class FakeClock:
    """Relógio determinístico: retorna sempre o mesmo instante até `advance`."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 16, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def config_defaults_yaml() -> str:
    return """\
fingerprint:
  algorithm: sha256
hazards:
  volatile_inputs: warn
state:
  path: .deploy-triggers/state.json
"""


@pytest.fixture
def config_local_yaml() -> str:
    return """\
fingerprint:
  algorithm: sha1
hazards:
  volatile_inputs: error
"""


@pytest.fixture
def api_catalog():
    """Catálogo com resource/method/integration do exemplo de API Gateway."""
    from deploy_triggers.core.model import Resource, ResourceCatalog

    return ResourceCatalog.from_resources(
        [
            Resource("aws_api_gateway_resource.users", {"id": "r1", "path_part": "users"}),
            Resource("aws_api_gateway_method.get_users", {"id": "m1", "http_method": "GET"}),
            Resource(
                "aws_api_gateway_integration.get_users",
                {"id": "i1", "type": "AWS_PROXY", "uri": "arn:aws:lambda:users"},
            ),
        ]
    )


@pytest.fixture
def definitions_yaml() -> str:
    return """\
resources:
  - address: aws_api_gateway_resource.users
    attributes: {id: r1, path_part: users}
  - address: aws_api_gateway_method.get_users
    attributes: {id: m1, http_method: GET}
  - address: aws_api_gateway_integration.get_users
    attributes: {id: i1, type: AWS_PROXY}
derived:
  - id: aws_api_gateway_stage.prod
    kind: stage
    depends_on: [aws_api_gateway_deployment.main]
    triggers:
      - derived: aws_api_gateway_deployment.main
      - value: prod
  - id: aws_api_gateway_deployment.main
    kind: deployment
    triggers:
      - ref: aws_api_gateway_resource.users.id
      - ref: aws_api_gateway_method.get_users.id
      - ref: aws_api_gateway_integration.get_users.id
"""


@pytest.fixture
def definitions_path(tmp_path, definitions_yaml):
    p = tmp_path / "definitions.yaml"
    p.write_text(definitions_yaml, encoding="utf-8")
    return p
