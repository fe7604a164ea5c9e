"""
Shipment schemas produced by the shipment document parser.

A Shipment is one transport order read from one uploaded instruction PDF.
Its tasks are kept in document order, which is also the operational order
(the n-th task pairs with the n-th leg of the trip).
"""

from pydantic import Field, computed_field
from typing import Optional
from enum import Enum
from datetime import datetime
from uuid import UUID

from models.base import BaseSchema


class Language(str, Enum):
    """Language of the document labels."""
    FRENCH = "fr"
    GERMAN = "de"
    ENGLISH = "en"
    UKRAINIAN = "ua"
    POLISH = "pl"


class TaskType(str, Enum):
    """Operational step within a shipment."""
    LOAD = "load"
    UNLOAD = "unload"
    COLLECT = "collect"
    DROPOFF = "dropoff"
    CLEANING = "cleaning"


class InstructionType(str, Enum):
    """Known document classifications (marker + description keyword)."""
    INSTRUCTIONS_DE_DECHARGEMENT = "INSTRUCTIONS DE DÉCHARGEMENT"
    INSTRUCTIONS_DE_CHARGEMENT = "INSTRUCTIONS DE CHARGEMENT"
    INSTRUCTIONS_DE_SHUNT = "INSTRUCTIONS DE SHUNT"
    LADE_ANWEISUNG = "LADE ANWEISUNG"
    ENTLADE_ANWEISUNG = "ENTLADE ANWEISUNG"
    UMFUHR_ANWEISUNG = "UMFUHR ANWEISUNG"
    ABSETZ_ANWEISUNG = "ABSETZ ANWEISUNG"
    LOAD_INSTRUCTION = "LOAD INSTRUCTION"
    UNLOAD_INSTRUCTION = "UNLOAD INSTRUCTION"
    TRANSFER_INSTRUCTION = "TRANSFER INSTRUCTION"
    SHUNT_INSTRUCTION = "SHUNT INSTRUCTION"
    SHUNTING_INSTRUCTION = "SHUNTING INSTRUCTION"
    DROP_INSTRUCTION = "DROP INSTRUCTION"


class WarningCode(str, Enum):
    """Non-fatal problems found while parsing a document."""
    INSTRUCTION_NOT_FOUND = "INSTRUCTION_NOT_FOUND"
    INSTRUCTION_TYPE_UNKNOWN = "INSTRUCTION_TYPE_UNKNOWN"
    SHIPMENT_ID_NOT_FOUND = "SHIPMENT_ID_NOT_FOUND"
    SHIPMENT_ID_INVALID = "SHIPMENT_ID_INVALID"
    NO_TASKS_FOUND = "NO_TASKS_FOUND"
    DATE_RANGE_INVALID = "DATE_RANGE_INVALID"
    COMPARTMENT_INVALID = "COMPARTMENT_INVALID"
    PARTIAL_TEXT_EXTRACTION = "PARTIAL_TEXT_EXTRACTION"


class ParseWarning(BaseSchema):
    """
    One thing the parser could not read.

    Collected on the Shipment so a manager reviewing the extracted data
    can see which fields need a manual check.
    """
    code: WarningCode
    message: str
    field: Optional[str] = Field(None, description="Field that could not be filled")
    value: Optional[str] = Field(None, description="Text that failed to parse")
    task_index: Optional[int] = Field(
        None,
        ge=0,
        description="Position of the task in Shipment.tasks, None for header fields"
    )


# ===================
# TASK SCHEMAS
# ===================

class TaskSection(BaseSchema):
    """
    One operational step (load, unload, collect, dropoff, cleaning).

    `lines` is the raw evidence the field parser works on. Fields prefixed
    with `current_` plus `start`/`end` are filled later by the driver
    workflow, never by the parser.
    """

    task_type: TaskType
    shipment_id: int = 0
    lines: list[str] = Field(default_factory=list)

    # Location
    address: str = ""
    company: str = ""
    destination_address: str = ""

    # References
    customer_reference: str = ""
    load_reference: str = ""
    unload_reference: str = ""

    # Time windows
    load_start_date: Optional[datetime] = None
    load_end_date: Optional[datetime] = None
    unload_start_date: Optional[datetime] = None
    unload_end_date: Optional[datetime] = None

    # Cargo
    tank_status: str = ""
    product: str = ""
    weight: str = ""
    volume: str = ""
    temperature: str = ""
    compartment: int = 0
    remark: str = ""

    # Driver workflow
    current_kilometrage: int = 0
    current_weight: int = 0
    current_temperature: float = 0.0
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @computed_field
    @property
    def content(self) -> str:
        """All lines of the section, newline-joined."""
        return "\n".join(self.lines)


# ===================
# SHIPMENT SCHEMAS
# ===================

class Shipment(BaseSchema):
    """
    Structured result of parsing one shipment instruction document.

    Header fields are filled at most once, first match wins. `driver_id`
    and `shipment_doc_id` are assigned by persistence after linking the
    shipment to a driver and a stored document.
    """

    shipment_id: int = Field(0, ge=0, description="Shipment number from the document header")
    doc_lang: Optional[Language] = None
    instruction_type: Optional[InstructionType] = None
    tasks: list[TaskSection] = Field(default_factory=list)

    car_id: str = ""
    driver_name: str = ""
    container: str = ""
    chassis: str = ""
    tank_details: str = ""
    general_remark: str = ""

    driver_id: Optional[UUID] = None
    shipment_doc_id: Optional[int] = None

    warnings: list[ParseWarning] = Field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def add_warning(
        self,
        code: WarningCode,
        message: str,
        field: Optional[str] = None,
        value: Optional[str] = None,
        task_index: Optional[int] = None,
    ) -> ParseWarning:
        """Record a non-fatal parse problem."""
        warning = ParseWarning(
            code=code,
            message=message,
            field=field,
            value=value,
            task_index=task_index,
        )
        self.warnings.append(warning)
        return warning


# ===================
# API SCHEMAS
# ===================

class ParseTextRequest(BaseSchema):
    """Already extracted document text."""
    text: str = Field(..., min_length=1, description="Layout-preserving text of the document")


class ShipmentParseResponse(BaseSchema):
    """Parsed shipment plus the chat readout shown to the manager."""
    shipment: Shipment
    warning_count: int = Field(ge=0)
    message_html: str
