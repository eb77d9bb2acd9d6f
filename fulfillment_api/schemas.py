from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_body(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Smart Home SYNC
# ---------------------------------------------------------------------------


class DeviceName(_CamelModel):
    default_names: List[str] = Field(default_factory=list, alias="defaultNames")
    name: str
    nicknames: List[str] = Field(default_factory=list)


class DeviceInfo(_CamelModel):
    manufacturer: str
    model: str
    hw_version: str = Field(default="1.0", alias="hwVersion")
    sw_version: str = Field(default="1.0", alias="swVersion")


class DescriptiveCapabilities(_CamelModel):
    available_states: List[str] = Field(alias="availableStates")


class NumericCapabilities(_CamelModel):
    raw_value_unit: str = Field(alias="rawValueUnit")


class SensorStateSupported(_CamelModel):
    name: str
    descriptive_capabilities: DescriptiveCapabilities = Field(alias="descriptiveCapabilities")
    numeric_capabilities: NumericCapabilities = Field(alias="numericCapabilities")


class SensorAttributes(_CamelModel):
    sensor_states_supported: List[SensorStateSupported] = Field(alias="sensorStatesSupported")


class SyncDevice(_CamelModel):
    id: str
    type: str
    traits: List[str]
    name: DeviceName
    will_report_state: bool = Field(default=False, alias="willReportState")
    room_hint: Optional[str] = Field(default=None, alias="roomHint")
    device_info: Optional[DeviceInfo] = Field(default=None, alias="deviceInfo")
    attributes: SensorAttributes


class SyncPayload(_CamelModel):
    agent_user_id: str = Field(alias="agentUserId")
    devices: List[SyncDevice]


class SyncResponse(_CamelModel):
    # requestId se devuelve tal cual, incluso null.
    request_id: Any = Field(alias="requestId")
    payload: SyncPayload

    def to_body(self) -> dict:
        body = super().to_body()
        body["requestId"] = self.request_id
        return body


# ---------------------------------------------------------------------------
# Smart Home QUERY
# ---------------------------------------------------------------------------


class SensorStateData(_CamelModel):
    name: str
    current_sensor_state: str = Field(alias="currentSensorState")
    raw_value: int = Field(alias="rawValue")


class DeviceQueryState(_CamelModel):
    status: str
    online: Optional[bool] = None
    error_code: Optional[str] = Field(default=None, alias="errorCode")
    current_sensor_state_data: Optional[List[SensorStateData]] = Field(
        default=None, alias="currentSensorStateData"
    )


class QueryPayload(_CamelModel):
    devices: Dict[str, DeviceQueryState]


class QueryResponse(_CamelModel):
    request_id: Any = Field(alias="requestId")
    payload: QueryPayload

    def to_body(self) -> dict:
        body = super().to_body()
        body["requestId"] = self.request_id
        return body


# ---------------------------------------------------------------------------
# Dialogflow / fallback
# ---------------------------------------------------------------------------


class FulfillmentTextResponse(_CamelModel):
    fulfillment_text: str = Field(alias="fulfillmentText")


class ErrorResponse(_CamelModel):
    error: str


FulfillmentResponse = Union[SyncResponse, QueryResponse, FulfillmentTextResponse, ErrorResponse]


# ---------------------------------------------------------------------------
# Health / OAuth
# ---------------------------------------------------------------------------


class WebhookStatus(BaseModel):
    status: str = "ok"
    message: str = "Webhook is operational"


class TokenResponse(BaseModel):
    token_type: str = "Bearer"
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: int


class OAuthErrorResponse(BaseModel):
    error: str
    error_description: Optional[str] = None

