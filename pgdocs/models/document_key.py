"""
models/document_key.py
----------------------
How a table stores document identity.

Tables created by 1.x releases carry a dedicated ``id`` column (COLUMN);
2.x tables keep the identity inside the JSON document (EMBEDDED) and make
it unique through an index on ``data ->> '<field>'``.
"""

from dataclasses import dataclass
from enum import Enum

DEFAULT_ID_FIELD = "Id"


class KeyStrategy(Enum):
    COLUMN = "column"
    EMBEDDED = "embedded"


@dataclass(frozen=True)
class DocumentKey:
    """
    The identity strategy for a table, plus the JSON field used when embedded.

    Attributes:
        strategy: Where the identity lives.
        field: The (case-sensitive) JSON field holding the identity; ignored for COLUMN.
    """
    strategy: KeyStrategy = KeyStrategy.EMBEDDED
    field: str = DEFAULT_ID_FIELD

    @property
    def is_embedded(self) -> bool:
        return self.strategy is KeyStrategy.EMBEDDED

    @property
    def expression(self) -> str:
        """SQL expression yielding a row's identity as text."""
        if self.is_embedded:
            return f"data ->> '{self.field}'"
        return "id"

    @property
    def conflict_target(self) -> str:
        """The ``ON CONFLICT`` target matching the unique key."""
        if self.is_embedded:
            return f"({self.expression})"
        return "id"
