"""
Data models for device link messages.

All models are immutable Pydantic models built on WireRecord.

Composite records (no command identifier):
- Vector3D, SensorData, BatchItem, BatchResult

Messages (one per command identifier):
- PingCommand / PingResponse
- GetDeviceInfoCommand / DeviceInfoResponse
- SendDataCommand / SendDataResponse
- SetConfigCommand / SetConfigResponse
- BatchCommand / BatchResponse
- SensorDataResponse
"""

from devlink.models.messages import (
    ALL_MESSAGE_TYPES,
    BatchCommand,
    BatchResponse,
    DeviceInfoResponse,
    GetDeviceInfoCommand,
    PingCommand,
    PingResponse,
    SendDataCommand,
    SendDataResponse,
    SensorDataResponse,
    SetConfigCommand,
    SetConfigResponse,
)
from devlink.models.records import (
    BatchItem,
    BatchResult,
    SensorData,
    Vector3D,
    fixed_bytes_from_text,
    text_from_fixed_bytes,
)

__all__ = [
    # Records
    "Vector3D",
    "SensorData",
    "BatchItem",
    "BatchResult",
    "fixed_bytes_from_text",
    "text_from_fixed_bytes",
    # Messages
    "PingCommand",
    "PingResponse",
    "GetDeviceInfoCommand",
    "DeviceInfoResponse",
    "SendDataCommand",
    "SendDataResponse",
    "SetConfigCommand",
    "SetConfigResponse",
    "BatchCommand",
    "BatchResponse",
    "SensorDataResponse",
    "ALL_MESSAGE_TYPES",
]
