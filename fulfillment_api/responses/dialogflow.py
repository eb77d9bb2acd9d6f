"""Respuestas de fulfillment para Dialogflow."""

from __future__ import annotations

from ..classification.models import WateringState
from ..schemas import FulfillmentTextResponse

STATE_MESSAGES = {
    WateringState.WELL_WATERED: "Your plants are well-watered! 🌱",
    WateringState.NEEDS_WATERING: "Your plants might need watering soon. 💦",
    WateringState.DRY: "Your plants are dry! Time to water them. 🚰",
}

STORE_ERROR_TEXT = "I couldn't retrieve the moisture level. Try again later!"
NOT_SURE_TEXT = "I'm not sure how to respond to that!"


def build_moisture_message(reading: int, state: WateringState) -> str:
    return f"The moisture level is {reading}%. {STATE_MESSAGES[state]}"


def format_fulfillment(reading: int, state: WateringState) -> FulfillmentTextResponse:
    return FulfillmentTextResponse(fulfillment_text=build_moisture_message(reading, state))


def format_fulfillment_error() -> FulfillmentTextResponse:
    return FulfillmentTextResponse(fulfillment_text=STORE_ERROR_TEXT)


def format_not_sure() -> FulfillmentTextResponse:
    return FulfillmentTextResponse(fulfillment_text=NOT_SURE_TEXT)
