import datetime as dt
import re
from enum import StrEnum
from typing import Self

from docreg.domain.document.model.name import (
    INTERNAL_EXTENSION,
    NAME_DELIMITER,
    base_name,
    to_external_name,
)
from docreg.domain.shared.error import InvalidNameError
from docreg.domain.shared.model.value import ValueObject

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
_PATH_SEPARATORS = ("/", "\\")


class IndexNamespace(StrEnum):
    CUSTOMER = "customer"
    TYPE = "type"
    DATE = "date"

    @property
    def directory(self) -> str:
        """Name of the directory holding this namespace under the storage root."""
        return f"index-by-{self.value}"


class DocumentKey(ValueObject):
    """Metadata embedded in a document name: ``customer_type_yyyy-mm-dd``."""

    customer: str
    type: str
    date: dt.date

    @classmethod
    def parse(cls, name: str) -> Self:
        """Decompose an external name (or its bare base name) into its key.

        Raises:
            InvalidNameError: Unless the base name splits into exactly three
                non-empty parts, none of which starts with a dot or holds a
                path separator, and the last one is a ``yyyy-mm-dd`` date.
        """
        parts = base_name(name).split(NAME_DELIMITER)
        if len(parts) != 3 or not all(parts):
            raise InvalidNameError(f"Invalid document name: {name}")
        # Each part names an index directory
        if any(part.startswith(".") for part in parts):
            raise InvalidNameError(f"Invalid document name: {name}")
        if any(sep in part for part in parts for sep in _PATH_SEPARATORS):
            raise InvalidNameError(f"Invalid document name: {name}")

        customer, doc_type, raw_date = parts
        if not _DATE_PATTERN.fullmatch(raw_date):
            raise InvalidNameError(f"Invalid document date: {raw_date}")
        try:
            date = dt.date.fromisoformat(raw_date)
        except ValueError as e:
            raise InvalidNameError(f"Invalid document date: {raw_date}") from e
        return cls(customer=customer, type=doc_type, date=date)

    @classmethod
    def from_internal_name(cls, internal_name: str) -> Self:
        """Key of a stored object, read back through its external name."""
        if not internal_name.endswith(INTERNAL_EXTENSION):
            raise InvalidNameError(f"Invalid stored object name: {internal_name}")
        return cls.parse(to_external_name(internal_name))

    def index_key(self, namespace: IndexNamespace) -> str:
        match namespace:
            case IndexNamespace.CUSTOMER:
                return self.customer
            case IndexNamespace.TYPE:
                return self.type
            case IndexNamespace.DATE:
                return self.date.isoformat()

    def index_keys(self) -> dict[IndexNamespace, str]:
        return {ns: self.index_key(ns) for ns in IndexNamespace}


class StoredDocument(ValueObject):
    """Canonical JSON content of a document together with both of its names."""

    name: str
    internal_name: str
    content: bytes


class ReconcileReport(ValueObject):
    indexed: int = 0  # index entries (re)created for stored documents
    pruned: int = 0  # dangling index entries removed
    skipped: list[str] = []  # stored names that do not parse into a key
