"""Domain Types: identity wrapper and wire-level enums shared across layers.

Invariants:
    - ProductId wraps int; never negative, 0 only for unsaved products
    - MAX_PRODUCT_ID is the largest unsigned 64-bit integer accepted in paths
    - MAX_STORED_INT bounds unsigned body fields to what a BIGINT column holds
    - ResponseCode values are the only codes ever returned in error envelopes
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ProductId = NewType("ProductId", int)

MAX_PRODUCT_ID: int = 2**64 - 1
MAX_STORED_INT: int = 2**63 - 1


# ─── Enums ───────────────────────────────────────────────────────

class ResponseCode(str, Enum):
    """Machine-readable codes of the {message, code} error envelope."""
    INVALID_REQUEST = "INVALID_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    NOTHING_TO_UPDATE = "NOTHING_TO_UPDATE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class ErrorType(str, Enum):
    """Where in the request pipeline an error was produced."""
    UNMARSHALL = "UNMARSHALL_ERROR"
    INVALID_PATH_PARAM = "PATH_PARAM_PARSE_ERROR"
    VALIDATION = "VALIDATION_ERROR"
    DOMAIN = "DOMAIN_ERROR"
