"""Error Taxonomy: closed set of product failure kinds with stage wrapping.

Invariants:
    - Every ProductError carries exactly one ProductErrorKind
    - wrap() never replaces the kind; it prefixes a stage and keeps the cause
    - message of a wrapped error is "<stage>: <cause.message>"
    - Kind messages contain no infrastructure detail (safe to return to clients)

Design Decisions:
    - str Enum whose value is the fixed human-readable message
    - Explicit cause attribute in addition to raise ... from, so the chain
      survives even when the error is rebuilt outside an except block
"""

from enum import Enum


class ProductErrorKind(str, Enum):
    """Domain failure kinds. The value is the message shown to clients."""
    SAVE_FAILED = "product could not be saved"
    RETRIEVE_MANY_FAILED = "products could not be retrieved"
    NOT_FOUND = "product could not be found"
    RETRIEVE_ONE_FAILED = "product could not be retrieved"
    UPDATE_FAILED = "product could not be updated"
    NOTHING_TO_UPDATE = "the request do not have changes"
    DELETE_FAILED = "product could not be deleted"


class ProductError(Exception):
    """Base exception for all product domain and persistence failures."""

    def __init__(
        self,
        kind: ProductErrorKind,
        stage: str | None = None,
        cause: "ProductError | None" = None,
    ):
        self.kind = kind
        self.stage = stage
        self.cause = cause
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.stage is None:
            return self.kind.value
        inner = self.cause.message if self.cause else self.kind.value
        return f"{self.stage}: {inner}"

    @property
    def stages(self) -> list[str]:
        """Stage labels from the outermost wrap inwards."""
        labels = []
        err: ProductError | None = self
        while err is not None:
            if err.stage:
                labels.append(err.stage)
            err = err.cause
        return labels

    def wrap(self, stage: str) -> "ProductError":
        """Return a new error with the same kind, annotated with `stage`."""
        return ProductError(self.kind, stage=stage, cause=self)

    def is_kind(self, kind: ProductErrorKind) -> bool:
        return self.kind is kind

    def __repr__(self) -> str:
        return f"ProductError(kind={self.kind.name}, message={self.message!r})"


# ─── Infrastructure Errors ──────────────────────────────────────

class DatabaseUnavailableError(Exception):
    """Database did not answer a ping before the connect timeout elapsed."""

    def __init__(self, timeout_seconds: float):
        super().__init__(
            f"db connection failed after {timeout_seconds}s timeout",
        )
        self.timeout_seconds = timeout_seconds
