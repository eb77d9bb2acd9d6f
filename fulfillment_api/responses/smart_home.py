"""Serializadores Smart Home (SYNC y QUERY).

Un solo dispositivo: el sensor de humedad de suelo, expuesto con el
trait SensorState. El nombre del sensor reportado es "SoilMoisture" tanto
en SYNC (sensorStatesSupported) como en QUERY (currentSensorStateData).
"""

from __future__ import annotations

from typing import Any

from common.config import DeviceSettings

from ..classification.models import WateringState
from ..schemas import (
    DescriptiveCapabilities,
    DeviceInfo,
    DeviceName,
    DeviceQueryState,
    NumericCapabilities,
    QueryPayload,
    QueryResponse,
    SensorAttributes,
    SensorStateData,
    SensorStateSupported,
    SyncDevice,
    SyncPayload,
    SyncResponse,
)

DEVICE_TYPE = "action.devices.types.SENSOR"
SENSOR_STATE_TRAIT = "action.devices.traits.SensorState"
SENSOR_NAME = "SoilMoisture"
RAW_VALUE_UNIT = "PERCENTAGE"

STATUS_SUCCESS = "SUCCESS"
STATUS_ERROR = "ERROR"
ERROR_DEVICE_OFFLINE = "deviceOffline"


def format_sync(request_id: Any, device: DeviceSettings) -> SyncResponse:
    sensor_device = SyncDevice(
        id=device.device_id,
        type=DEVICE_TYPE,
        traits=[SENSOR_STATE_TRAIT],
        name=DeviceName(
            default_names=list(device.default_names),
            name=device.name,
            nicknames=list(device.nicknames),
        ),
        will_report_state=False,
        room_hint=device.room_hint,
        device_info=DeviceInfo(manufacturer=device.manufacturer, model=device.model),
        attributes=SensorAttributes(
            sensor_states_supported=[
                SensorStateSupported(
                    name=SENSOR_NAME,
                    descriptive_capabilities=DescriptiveCapabilities(
                        available_states=[state.value for state in WateringState],
                    ),
                    numeric_capabilities=NumericCapabilities(raw_value_unit=RAW_VALUE_UNIT),
                )
            ]
        ),
    )
    return SyncResponse(
        request_id=request_id,
        payload=SyncPayload(agent_user_id=device.agent_user_id, devices=[sensor_device]),
    )


def format_query(
    request_id: Any,
    device: DeviceSettings,
    reading: int,
    state: WateringState,
) -> QueryResponse:
    device_state = DeviceQueryState(
        status=STATUS_SUCCESS,
        online=True,
        current_sensor_state_data=[
            SensorStateData(
                name=SENSOR_NAME,
                current_sensor_state=state.value,
                raw_value=reading,
            )
        ],
    )
    return QueryResponse(
        request_id=request_id,
        payload=QueryPayload(devices={device.device_id: device_state}),
    )


def format_query_error(request_id: Any, device: DeviceSettings) -> QueryResponse:
    device_state = DeviceQueryState(status=STATUS_ERROR, error_code=ERROR_DEVICE_OFFLINE)
    return QueryResponse(
        request_id=request_id,
        payload=QueryPayload(devices={device.device_id: device_state}),
    )
