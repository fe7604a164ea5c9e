"""
Base schema for all models.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - Validate on attribute assignment
        - Allow ORM objects (from_attributes)

    Strings are kept verbatim: leading spaces and column gaps in document
    lines are what the parser reads structure from.
    """
    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True
    )
