"""Dialog lifecycle states and the render projection handed to the view."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class FormState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    CLOSED = "closed"


class StockField(str, Enum):
    """Which stock sub-form is shown."""

    QUANTITY = "stock_cantidad"
    AVAILABILITY = "stock"


class FormView(BaseModel):
    title: str
    submit_label: str
    submit_disabled: bool
    stock_field: StockField
    error: str | None = None
    values: dict[str, Any] = Field(..., description="Draft values keyed by input name")
    availability_options: list[str]
    category_suggestions: list[str] = Field(default_factory=list)
