"""Document naming: external (``.xml``) and internal (``.json``) forms.

An external name looks like ``acme_report_2025-12-09.xml``. The same document
is stored as ``acme_report_2025-12-09.json``.
"""

import re

from docreg.domain.shared.error import InvalidNameError

EXTERNAL_EXTENSION = ".xml"
INTERNAL_EXTENSION = ".json"
NAME_DELIMITER = "_"

EXTERNAL_NAME_PATTERN = re.compile(r"[a-zA-Z0-9]+_[a-zA-Z0-9]+_\d{4}-\d{2}-\d{2}\.xml")
INVALID_NAME_MESSAGE = "Invalid file name format. Expected: customer_type_yyyy-MM-dd.xml"


def _strip_suffix(name: str, suffix: str) -> str:
    return name[: -len(suffix)] if name.endswith(suffix) else name


def base_name(name: str) -> str:
    """Name without its external extension."""
    return _strip_suffix(name, EXTERNAL_EXTENSION)


def to_internal_name(external_name: str) -> str:
    return _strip_suffix(external_name, EXTERNAL_EXTENSION) + INTERNAL_EXTENSION


def to_external_name(internal_name: str) -> str:
    return _strip_suffix(internal_name, INTERNAL_EXTENSION) + EXTERNAL_EXTENSION


def validate_external_name(name: str | None) -> str:
    """Check an uploaded filename against the accepted external pattern.

    Returns the name unchanged so callers can validate inline.

    Raises:
        InvalidNameError: If the name is missing or does not match.
    """
    if not name or not EXTERNAL_NAME_PATTERN.fullmatch(name):
        raise InvalidNameError(INVALID_NAME_MESSAGE)
    return name
