"""Create/edit product dialog controller."""
from product_dialog.api.schemas.product import Availability, ProductDraft, ProductPayload
from product_dialog.services.form_controller import FormController

__all__ = ["Availability", "FormController", "ProductDraft", "ProductPayload"]
