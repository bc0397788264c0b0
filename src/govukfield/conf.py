"""
Package settings.

Override defaults in the Django settings module:

    GOVUK_FIELD = {
        "ID_PREFIX": "f-",
        "DEFAULT_NAME": "field",
    }
"""

from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    # Prefix of generated element ids: f-<name>, f-<name>-error, f-<name>-hint
    "ID_PREFIX": "f-",
    # Name used when a descriptor does not supply one
    "DEFAULT_NAME": "field",
}


def get_setting(key: str) -> Any:
    """Return a GOVUK_FIELD setting, falling back to the package default."""
    overrides = getattr(settings, "GOVUK_FIELD", {}) if settings.configured else {}
    return overrides.get(key, DEFAULTS[key])
