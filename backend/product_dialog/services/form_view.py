"""Pure projections from dialog state to what the view renders."""

from __future__ import annotations

from collections.abc import Iterable

from product_dialog.api.schemas.form import StockField

TITLE_EDIT = "Editar Producto"
TITLE_CREATE = "Agregar Producto"
LABEL_SUBMITTING = "Guardando..."
LABEL_SUBMIT = "Guardar Producto"


def visible_stock_field(tracks_stock: bool) -> StockField:
    """Quantity input when stock is tracked, availability select otherwise.

    Both values stay in the draft whichever one is visible.
    """
    return StockField.QUANTITY if tracks_stock else StockField.AVAILABILITY


def dialog_title(is_editing: bool) -> str:
    return TITLE_EDIT if is_editing else TITLE_CREATE


def submit_label(submitting: bool) -> str:
    return LABEL_SUBMITTING if submitting else LABEL_SUBMIT


def filter_suggestions(categories: Iterable[str], query: str | None) -> list[str]:
    """Case-insensitive substring match for the category combobox.

    Empty query returns every known category; duplicates and blanks dropped,
    original order kept.
    """
    needle = (query or "").strip().lower()
    seen: set[str] = set()
    matches: list[str] = []
    for category in categories:
        if not category or category in seen:
            continue
        seen.add(category)
        if needle in category.lower():
            matches.append(category)
    return matches
