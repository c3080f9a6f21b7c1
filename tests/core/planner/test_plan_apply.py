from __future__ import annotations

from datetime import datetime, timezone

from deploy_triggers.core.config import Settings
from deploy_triggers.core.context import PlanContext
from deploy_triggers.core.definitions import load_definitions, validate_definitions
from deploy_triggers.core.model import Action
from deploy_triggers.core.planner import apply_plan, plan_definitions
from deploy_triggers.core.state import InMemoryStateStore, JsonFileStateStore


DEPLOYMENT = "aws_api_gateway_deployment.main"
STAGE = "aws_api_gateway_stage.prod"
TS = datetime(2026, 1, 16, 12, 0, 0, tzinfo=timezone.utc)


def test_first_pass_creates_everything_in_dependency_order(definitions_path):
    defs = load_definitions(definitions_path)
    ctx = PlanContext.new()

    result = plan_definitions(defs, InMemoryStateStore(), ctx=ctx)

    assert [ev.resource_id for ev in result.evaluations] == [DEPLOYMENT, STAGE]
    assert result.summary() == {"create": 2, "recreate": 0, "noop": 0}
    assert result.pass_id == ctx.pass_id
    assert ctx.events[0]["message"] == "plan started"
    assert ctx.events[-1]["message"] == "plan finished"


def test_plan_does_not_write_and_apply_persists(definitions_path, tmp_path):
    defs = load_definitions(definitions_path)
    store = JsonFileStateStore(tmp_path / "state.json")

    result = plan_definitions(defs, store)
    assert store.ids() == []

    written = apply_plan(result, store, now=TS)

    assert written == [DEPLOYMENT, STAGE]
    assert store.get(DEPLOYMENT).fingerprint == result.get(DEPLOYMENT).fingerprint
    assert store.get(DEPLOYMENT).generation == 1


def test_unchanged_inputs_plan_noop_on_second_pass(definitions_path):
    defs = load_definitions(definitions_path)
    store = InMemoryStateStore()
    apply_plan(plan_definitions(defs, store), store, now=TS)

    second = plan_definitions(defs, store)

    assert second.changes() == []
    assert apply_plan(second, store, now=TS) == []


def test_integration_change_cascades_to_stage(definitions_yaml, definitions_path, tmp_path):
    """
    Recriar o deployment muda o fingerprint do stage no mesmo passe:
    o stage passa a apontar para o novo snapshot.
    """
    store = InMemoryStateStore()
    apply_plan(plan_definitions(load_definitions(definitions_path), store), store, now=TS)

    changed = tmp_path / "changed.yaml"
    changed.write_text(definitions_yaml.replace("{id: i1, type: AWS_PROXY}", "{id: i2, type: AWS_PROXY}"), encoding="utf-8")
    ctx = PlanContext.new()

    result = plan_definitions(load_definitions(changed), store, ctx=ctx)

    assert result.get(DEPLOYMENT).action is Action.RECREATE
    assert result.get(STAGE).action is Action.RECREATE

    apply_plan(result, store, now=TS, ctx=ctx)
    assert store.get(DEPLOYMENT).generation == 2
    persisted = [e for e in ctx.events if e["message"] == "fingerprint persisted"]
    assert [e["resource_id"] for e in persisted] == [DEPLOYMENT, STAGE]


def test_volatile_trigger_reported_as_plan_hazard(fake_clock):
    defs = validate_definitions(
        {"derived": [{"id": DEPLOYMENT, "triggers": [{"source": "timestamp"}]}]}
    )
    store = InMemoryStateStore()
    ctx = PlanContext.new()

    first = plan_definitions(defs, store, clock=fake_clock, ctx=ctx)
    apply_plan(first, store, now=TS)
    fake_clock.advance(1)
    second = plan_definitions(defs, store, clock=fake_clock, ctx=ctx)

    assert first.get(DEPLOYMENT).action is Action.CREATE
    assert second.get(DEPLOYMENT).action is Action.RECREATE
    assert second.has_hazards
    assert DEPLOYMENT in ctx.warnings


def test_settings_algorithm_is_used(definitions_path):
    result = plan_definitions(load_definitions(definitions_path), InMemoryStateStore(), settings=Settings(algorithm="sha1"))
    assert all(ev.fingerprint.algorithm == "sha1" for ev in result.evaluations)
    assert result.to_dict()["summary"]["create"] == 2


def test_state_path_setting_selects_the_default_store(definitions_path, tmp_path):
    settings = Settings(state_path=str(tmp_path / "state" / "triggers.json"))
    defs = load_definitions(definitions_path)

    first = plan_definitions(defs, settings=settings)
    apply_plan(first, JsonFileStateStore.from_settings(settings), now=TS)
    second = plan_definitions(defs, settings=settings)

    assert (tmp_path / "state" / "triggers.json").exists()
    assert first.summary()["create"] == 2
    assert [ev.action for ev in second.evaluations] == [Action.NOOP, Action.NOOP]
