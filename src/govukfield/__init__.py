from importlib.metadata import PackageNotFoundError, version

from .errors import ErrorResolution, first_error, resolve_error
from .fields import assemble, render_text_field
from .forms import form_errors, render_bound_field
from .types import (
    ErrorRecord,
    FieldDescriptor,
    TextFieldOptions,
    ValidationPayload,
    normalize,
)

try:
    __version__ = version("django-govuk-field")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "ErrorRecord",
    "ErrorResolution",
    "FieldDescriptor",
    "TextFieldOptions",
    "ValidationPayload",
    "assemble",
    "first_error",
    "form_errors",
    "normalize",
    "render_bound_field",
    "render_text_field",
    "resolve_error",
    "__version__",
]
