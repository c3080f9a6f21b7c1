from deploy_triggers.core import errors


def test_payloads_are_serializable_and_typed():
    payload = errors.volatile_trigger_hazard(resource_id="dep", sources=["timestamp"])
    data = payload.to_dict()

    assert data["type"] == errors.VOLATILE_TRIGGER_HAZARD
    assert data["decision_required"] is True
    assert data["details"] == {"resource_id": "dep", "sources": ["timestamp"]}
    assert data["hint"]


def test_plan_configuration_error_defaults():
    payload = errors.plan_configuration_error(details={"cycle": ["a", "b"]})
    assert payload.type == errors.PLAN_CONFIGURATION_ERROR
    assert payload.decision_required is False
    assert payload.details == {"cycle": ["a", "b"]}
