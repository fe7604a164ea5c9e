"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.shipment import (
    Language,
    TaskType,
    InstructionType,
    WarningCode,
    ParseWarning,
    TaskSection,
    Shipment,
    ParseTextRequest,
    ShipmentParseResponse,
)

__all__ = [
    # Base
    "BaseSchema",

    # Shipment
    "Language",
    "TaskType",
    "InstructionType",
    "WarningCode",
    "ParseWarning",
    "TaskSection",
    "Shipment",
    "ParseTextRequest",
    "ShipmentParseResponse",
]
