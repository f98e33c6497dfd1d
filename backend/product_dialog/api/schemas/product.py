"""Pydantic models describing the product draft and its wire payload."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from product_dialog.exceptions import UnknownFieldError
from product_dialog.utils.coercion import parse_number

# Raw entry as typed into a numeric input or read from a record
RawNumber = str | int | float

IDENTITY_KEY = "id"


class Availability(str, Enum):
    YES = "Sí"
    NO = "No"


class ProductDraft(BaseModel):
    """Unsaved form state for one open cycle of the dialog.

    Field names are Python names; aliases are the wire/input names used by
    the product service and by the rendered inputs.
    """

    sku: str = Field("", alias="codigo_sku", description="Optional internal code")
    name: str = Field("", alias="nombre")
    description: str = Field("", alias="descripcion")
    unit_price: RawNumber = Field("", alias="precio_unitario")
    availability: str = Field(Availability.YES.value, alias="stock")
    image_url: str = Field("", alias="imagen_url")
    category: str = Field("", alias="categoria")
    tracks_stock: bool = Field(False, alias="controla_stock")
    stock_quantity: RawNumber = Field(0, alias="stock_cantidad")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Current values keyed by input name, for rendering."""
        return self.model_dump(by_alias=True)


# Fields fed by a checkbox (boolean `checked` signal rather than a value)
CHECKBOX_FIELDS = frozenset({"tracks_stock"})

_ALIASES = {field.alias: name for name, field in ProductDraft.model_fields.items()}


def resolve_field(name: str) -> str:
    """Map an input name (wire alias or Python name) to the draft field."""
    if name in ProductDraft.model_fields:
        return name
    try:
        return _ALIASES[name]
    except KeyError:
        raise UnknownFieldError(name) from None


def default_draft() -> ProductDraft:
    return ProductDraft()


def record_identity(record: Mapping[str, Any] | None) -> Any:
    """Return the record's identity key, None when creating."""
    if not record:
        return None
    return record.get(IDENTITY_KEY) or None


def draft_from_record(record: Mapping[str, Any] | None) -> ProductDraft:
    """Build a fresh draft from an existing record.

    Each field takes the record's value when present and truthy, otherwise
    its default. Values are kept as-is so inputs show exactly what the
    service returned.
    """
    if record_identity(record) is None:
        return default_draft()

    values: dict[str, Any] = {}
    for name, field in ProductDraft.model_fields.items():
        raw = record.get(field.alias)
        values[name] = raw if raw else field.default
    return ProductDraft.model_construct(**values)


class ProductPayload(BaseModel):
    """Body sent to POST /productos and PUT /productos/{id}."""

    codigo_sku: str
    nombre: str
    descripcion: str
    precio_unitario: float
    stock: str
    imagen_url: str
    categoria: str = ""
    controla_stock: bool
    stock_cantidad: float | None

    model_config = ConfigDict(coerce_numbers_to_str=True)

    @classmethod
    def from_draft(cls, draft: ProductDraft) -> "ProductPayload":
        """Clone the draft and reconcile the two stock representations.

        With tracking on, availability is derived from the quantity. With
        tracking off, the quantity sent is always 0, even if one was entered.
        """
        if draft.tracks_stock:
            quantity = parse_number(draft.stock_quantity)
            in_stock = quantity is not None and quantity > 0
            availability = Availability.YES.value if in_stock else Availability.NO.value
        else:
            quantity = 0
            availability = draft.availability

        return cls(
            codigo_sku=draft.sku or "",
            nombre=draft.name,
            descripcion=draft.description or "",
            precio_unitario=parse_number(draft.unit_price),
            stock=availability,
            imagen_url=draft.image_url or "",
            categoria=draft.category or "",
            controla_stock=bool(draft.tracks_stock),
            stock_cantidad=quantity,
        )
