"""Errors raised by the product form controller."""


class FormValidationError(ValueError):
    """Required fields missing or not numeric at submit time."""

    def __init__(self, fields: list[str]):
        self.fields = fields
        super().__init__(f"Missing or invalid required field(s): {', '.join(fields)}")


class UnknownFieldError(KeyError):
    """Field update addressed a name the draft does not have."""

    pass


class SubmitInProgressError(RuntimeError):
    """A save request is already outstanding for this dialog."""

    pass


class DialogClosedError(RuntimeError):
    """The dialog was closed; open it again before submitting."""

    pass
