"""
Field error resolution.

The error map handed to a render call is keyed by field name:

    {"email": [{"inline": "Enter an email address", "validator": "required"}, ...]}

Only the entry under the field's own name is read, and only its first record
is ever displayed. Validators that report several failures for one field
should order them by importance.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .types import ErrorRecord, ValidationPayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorResolution:
    """The error state of one field."""

    has_error: bool
    message: str | None = None
    payload: ValidationPayload | None = None

    @property
    def serialized_payload(self) -> str | None:
        """JSON text for the input's data-validation attribute."""
        if self.payload is None:
            return None
        return self.payload.model_dump_json()


NO_ERROR = ErrorResolution(has_error=False)


def first_error(records: Iterable[Any] | None) -> ErrorRecord | None:
    """
    Return the authoritative error record: the first. The rest are ignored.

    A plain string is taken as the message. A record that cannot be read
    still counts as an error, with no message or validator. A lone record
    given in place of a sequence is treated as a sequence of one.
    """
    if records is None or records == "":
        return None
    if isinstance(records, (str, Mapping, ErrorRecord)) or not isinstance(records, Iterable):
        records = [records]
    for record in records:
        if isinstance(record, ErrorRecord):
            return record
        if isinstance(record, str):
            return ErrorRecord(inline=record)
        try:
            return ErrorRecord.model_validate(record)
        except PydanticValidationError as e:
            logger.debug("Unreadable error record %r: %s", record, e)
            return ErrorRecord()
    return None


def resolve_error(name: str, errors: Mapping[str, Any] | None) -> ErrorResolution:
    """Derive the error state of the field called name from a form's error map."""
    record = first_error((errors or {}).get(name))
    if record is None:
        return NO_ERROR
    return ErrorResolution(
        has_error=True,
        message=record.inline,
        payload=ValidationPayload(fn=name, va=record.validator),
    )
