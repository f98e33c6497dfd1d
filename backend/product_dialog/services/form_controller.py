"""Controller for the create/edit product dialog.

Owns the draft for one open cycle, applies field edits, and turns a submit
into a POST or PUT against the product service. Outcomes reach the parent
view only through the ``on_success`` and ``on_close`` callbacks.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import httpx

from product_dialog.api.schemas.form import FormState, FormView
from product_dialog.api.schemas.product import (
    CHECKBOX_FIELDS,
    Availability,
    ProductDraft,
    ProductPayload,
    default_draft,
    draft_from_record,
    record_identity,
    resolve_field,
)
from product_dialog.core.config import Settings, get_settings
from product_dialog.core.credentials import TokenProvider, settings_token_provider
from product_dialog.exceptions import (
    DialogClosedError,
    FormValidationError,
    SubmitInProgressError,
)
from product_dialog.services.form_view import (
    dialog_title,
    filter_suggestions,
    submit_label,
    visible_stock_field,
)
from product_dialog.services.product_api import FALLBACK_ERROR, save_product
from product_dialog.utils.coercion import is_blank, parse_number

logger = logging.getLogger(__name__)


def _noop() -> None:
    return None


def missing_required_fields(draft: ProductDraft) -> list[str]:
    """Input names that would block the form: empty name, empty or non-numeric price."""
    missing = []
    if is_blank(draft.name):
        missing.append("nombre")
    if is_blank(draft.unit_price) or parse_number(draft.unit_price) is None:
        missing.append("precio_unitario")
    return missing


class FormController:
    """Form state and save logic for a single product dialog instance.

    Editing iff the record carries an identity key. Each open cycle gets its
    own draft; responses that belong to an earlier cycle, or arrive after the
    dialog was cancelled, are dropped. The HTTP request itself is never
    cancelled.
    """

    def __init__(
        self,
        record: Mapping[str, Any] | None = None,
        categories: Iterable[str] | None = None,
        on_close: Callable[[], None] | None = None,
        on_success: Callable[[], None] | None = None,
        *,
        token_provider: TokenProvider | None = None,
        client: httpx.Client | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.categories = list(categories or [])
        self.on_close = on_close or _noop
        self.on_success = on_success or _noop
        self.token_provider = token_provider or settings_token_provider(self.settings)
        self.client = client

        self._lock = threading.Lock()
        self._cycle = 0
        self._identity: Any = None
        self._draft = default_draft()
        self._error: str | None = None
        self._state = FormState.IDLE
        # Outlives open cycles: a reopened dialog stays blocked until the request returns
        self._in_flight = False

        self.open(record)

    # -- state accessors -------------------------------------------------

    @property
    def draft(self) -> ProductDraft:
        return self._draft

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def submitting(self) -> bool:
        return self._in_flight

    @property
    def is_editing(self) -> bool:
        return self._identity is not None

    @property
    def record_id(self) -> Any:
        return self._identity

    # -- lifecycle -------------------------------------------------------

    def open(self, record: Mapping[str, Any] | None = None) -> ProductDraft:
        """Start a new open cycle, replacing the draft in full.

        A save still running from an earlier cycle keeps ``submitting`` set;
        its response is dropped when it arrives.
        """
        with self._lock:
            self._cycle += 1
            self._identity = record_identity(record)
            self._draft = draft_from_record(record)
            self._error = None
            self._state = FormState.IDLE
            draft = self._draft

        if self._identity is None:
            logger.debug("Product dialog opened in create mode")
        else:
            logger.debug(f"Product dialog opened for product {self._identity}")
        return draft

    def set_record(self, record: Mapping[str, Any] | None) -> bool:
        """Accept a new record from the parent view.

        The draft is rebuilt only when the identity changes (which covers a
        switch between edit and create) or the dialog was closed. A refetched
        record with the same ``id`` does not repopulate the draft, so edits in
        progress survive a parent refresh. Returns True when it was rebuilt.
        """
        if self._state is not FormState.CLOSED and record_identity(record) == self._identity:
            return False
        self.open(record)
        return True

    def cancel(self) -> None:
        """Close the dialog on user request and discard the draft."""
        with self._lock:
            was_submitting = self._in_flight
            self._state = FormState.CLOSED
            self._draft = default_draft()
            self._error = None

        if was_submitting:
            logger.info("Product dialog closed with a save still in flight")
        self.on_close()

    # -- editing ---------------------------------------------------------

    def handle_change(
        self, name: str, value: Any = None, *, checked: bool | None = None
    ) -> ProductDraft:
        """Apply one field edit and return the new draft.

        ``name`` may be the input name (``nombre``) or the draft field name
        (``name``). Checkbox fields take ``checked``; every other field stores
        ``value`` exactly as entered.
        """
        field = resolve_field(name)
        if field in CHECKBOX_FIELDS:
            value = bool(value) if checked is None else bool(checked)

        with self._lock:
            if self._state is FormState.CLOSED:
                raise DialogClosedError("Product dialog is closed")
            self._draft = self._draft.model_copy(update={field: value})
            return self._draft

    def category_suggestions(self, query: str | None = None) -> list[str]:
        if query is None:
            query = self._draft.category
        return filter_suggestions(self.categories, query)

    def view(self) -> FormView:
        """Snapshot of everything the dialog renders."""
        draft = self._draft
        submitting = self.submitting
        return FormView(
            title=dialog_title(self.is_editing),
            submit_label=submit_label(submitting),
            submit_disabled=submitting,
            stock_field=visible_stock_field(bool(draft.tracks_stock)),
            error=self._error,
            values=draft.to_wire(),
            availability_options=[option.value for option in Availability],
            category_suggestions=self.category_suggestions(),
        )

    # -- submit ----------------------------------------------------------

    def submit(self) -> bool:
        """Validate, save, and report the outcome.

        Returns True when the product service accepted the save. Failures are
        kept in ``error`` and never raised; only a blocked submit (missing
        fields, closed dialog, save already running) raises.
        """
        with self._lock:
            if self._state is FormState.CLOSED:
                raise DialogClosedError("Product dialog is closed")
            if self._in_flight:
                raise SubmitInProgressError("A save is already in progress")

            draft = self._draft
            missing = missing_required_fields(draft)
            if missing:
                raise FormValidationError(missing)

            cycle = self._cycle
            product_id = self._identity
            self._error = None
            self._state = FormState.SUBMITTING
            self._in_flight = True

        success = False
        error: str | None = FALLBACK_ERROR
        try:
            payload = ProductPayload.from_draft(draft)
            result = save_product(
                payload,
                product_id,
                token=self.token_provider(),
                client=self.client,
                settings=self.settings,
            )
            success = bool(result["success"])
            error = None if success else (result.get("error") or FALLBACK_ERROR)
        except Exception as e:
            logger.error(f"Unexpected error submitting product form: {e}", exc_info=True)
        finally:
            with self._lock:
                self._in_flight = False
                stale = cycle != self._cycle or self._state is FormState.CLOSED
                if not stale:
                    self._state = FormState.SUCCEEDED if success else FormState.IDLE
                    self._error = error

        if stale:
            logger.info(
                f"Ignoring save response for product {product_id}: dialog closed or reopened"
            )
            return False

        if success:
            logger.info(
                f"Product {'updated' if product_id is not None else 'created'} "
                f"(id={product_id})"
            )
            self.on_success()
        else:
            logger.warning(f"Product save failed: {error}")
        return success
