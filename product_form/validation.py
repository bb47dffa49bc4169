# product_form/validation.py
"""
Validation of a raw Add Product draft.

The raw draft is whatever the form holds: strings from the text inputs, a
number (or numeric string) from the price input and the current selections.
`validate_draft` checks every field in one pass and either returns a typed
`ProductDraft` or raises `DraftValidationError` with one `FieldError` per
offending field. Nothing here touches the network.
"""
from typing import Any, Dict, Mapping, Type

from pydantic import ValidationError

from product_form.schemas.product import ProductDraft


class FieldError(ValueError):
    """A problem with a single form field, shown beneath that field."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(field={self.field!r}, message={self.message!r})"


class RequiredFieldError(FieldError):
    pass


class RangeError(FieldError):
    pass


class RequiredSelectionError(FieldError):
    pass


class DraftValidationError(ValueError):
    def __init__(self, errors: Dict[str, FieldError]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid product draft ({fields})")

    @property
    def fields(self):
        return sorted(self.errors)


# field -> (error class, message)
FIELD_RULES: Dict[str, tuple] = {
    "name": (RequiredFieldError, "Product name is required"),
    "price": (RangeError, "Price must be greater than 0"),
    "type": (RequiredSelectionError, "Please select a product type"),
    "color": (RequiredSelectionError, "Please select a color"),
}


def _field_error(field: str) -> FieldError:
    cls: Type[FieldError]
    cls, message = FIELD_RULES.get(field, (FieldError, "Invalid value"))
    return cls(field, message)


def validate_draft(raw: Mapping[str, Any]) -> ProductDraft:
    """
    Validate the raw field mapping. Unknown keys are ignored; missing keys
    count as empty.
    """
    data = {k: raw.get(k) for k in ProductDraft.model_fields if raw.get(k) is not None}
    try:
        return ProductDraft.model_validate(data)
    except ValidationError as exc:
        errors: Dict[str, FieldError] = {}
        for err in exc.errors():
            loc = err.get("loc") or ("__root__",)
            field = str(loc[0])
            # first error per field wins
            if field not in errors:
                errors[field] = _field_error(field)
        raise DraftValidationError(errors) from exc
