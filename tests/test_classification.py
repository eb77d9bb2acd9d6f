"""Tests de clasificación.

1. Estado de riego: umbrales 30/60 y extremos
2. Protocolo: variantes soportadas, payloads malformados, total y exclusivo

Ejecutar:
    pytest tests/test_classification.py -v
"""

import pytest

from fulfillment_api.classification import (
    ProtocolVariant,
    WateringState,
    WateringThresholds,
    classify_protocol,
    classify_watering_state,
    extract_smart_home_intent,
    matches_known_shape,
)


# =============================================================================
# ESTADO DE RIEGO
# =============================================================================

class TestWateringState:
    """Umbrales: >60 well-watered, >30 needs-watering, resto dry."""

    @pytest.mark.parametrize(
        "reading,expected",
        [
            (30, WateringState.DRY),
            (31, WateringState.NEEDS_WATERING),
            (60, WateringState.NEEDS_WATERING),
            (61, WateringState.WELL_WATERED),
        ],
    )
    def test_boundaries(self, reading, expected):
        assert classify_watering_state(reading) is expected

    @pytest.mark.parametrize("reading", [-50, -1, 0, 15])
    def test_low_and_negative_are_dry(self, reading):
        assert classify_watering_state(reading) is WateringState.DRY

    @pytest.mark.parametrize("reading", [75, 100, 150])
    def test_high_and_over_100_are_well_watered(self, reading):
        assert classify_watering_state(reading) is WateringState.WELL_WATERED

    def test_equivalence_over_range(self):
        """Cada lectura cae exactamente en el bucket que dicta su regla."""
        for r in range(-10, 111):
            state = classify_watering_state(r)
            assert (state is WateringState.WELL_WATERED) == (r > 60)
            assert (state is WateringState.NEEDS_WATERING) == (30 < r <= 60)
            assert (state is WateringState.DRY) == (r <= 30)

    def test_custom_thresholds(self):
        thresholds = WateringThresholds(dry_max=20, needs_watering_max=50)
        assert classify_watering_state(25, thresholds) is WateringState.NEEDS_WATERING
        assert classify_watering_state(51, thresholds) is WateringState.WELL_WATERED

    def test_wire_values(self):
        assert [s.value for s in WateringState] == ["dry", "needs-watering", "well-watered"]


# =============================================================================
# PROTOCOLO
# =============================================================================

class TestProtocolClassifier:
    """Clasificación por forma del body."""

    def test_sync(self):
        body = {"inputs": [{"intent": "action.devices.SYNC"}], "requestId": "r1"}
        assert classify_protocol(body) is ProtocolVariant.SMART_HOME_SYNC

    def test_query(self):
        body = {"inputs": [{"intent": "action.devices.QUERY"}], "requestId": "r2"}
        assert classify_protocol(body) is ProtocolVariant.SMART_HOME_QUERY

    def test_dialogflow(self):
        body = {"queryResult": {"queryText": "What's the moisture level?"}}
        assert classify_protocol(body) is ProtocolVariant.DIALOGFLOW_FULFILLMENT

    def test_empty_body(self):
        assert classify_protocol({}) is ProtocolVariant.UNRECOGNIZED

    def test_smart_home_intent_wins_over_query_result(self):
        body = {"inputs": [{"intent": "action.devices.QUERY"}], "queryResult": {}}
        assert classify_protocol(body) is ProtocolVariant.SMART_HOME_QUERY

    def test_execute_with_query_result_falls_to_dialogflow(self):
        body = {"inputs": [{"intent": "action.devices.EXECUTE"}], "queryResult": {"queryText": "x"}}
        assert classify_protocol(body) is ProtocolVariant.DIALOGFLOW_FULFILLMENT

    @pytest.mark.parametrize(
        "body",
        [
            None,
            [],
            "inputs",
            42,
            {"inputs": None},
            {"inputs": []},
            {"inputs": "action.devices.SYNC"},
            {"inputs": {"intent": "action.devices.SYNC"}},
            {"inputs": [None]},
            {"inputs": ["action.devices.SYNC"]},
            {"inputs": [{}]},
            {"inputs": [{"intent": 7}]},
            {"inputs": [{"intent": "action.devices.EXECUTE"}]},
            {"queryResult": None},
            {"requestId": "r9"},
        ],
    )
    def test_malformed_bodies_never_raise(self, body):
        assert classify_protocol(body) is ProtocolVariant.UNRECOGNIZED

    def test_only_first_input_is_inspected(self):
        body = {"inputs": [{"intent": "action.devices.EXECUTE"}, {"intent": "action.devices.SYNC"}]}
        assert classify_protocol(body) is ProtocolVariant.UNRECOGNIZED


class TestIntentExtraction:
    def test_returns_intent(self):
        assert extract_smart_home_intent({"inputs": [{"intent": "action.devices.SYNC"}]}) == "action.devices.SYNC"

    def test_missing_inputs_returns_none(self):
        assert extract_smart_home_intent({"queryResult": {}}) is None

    def test_known_shape(self):
        assert matches_known_shape({"inputs": []}) is True
        assert matches_known_shape({"queryResult": None}) is True
        assert matches_known_shape({}) is False
        assert matches_known_shape(["inputs"]) is False
