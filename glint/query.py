"""Admission checks for SQL submitted to the query service."""

from __future__ import annotations

from enum import Enum

MAX_QUERY_LENGTH = 16_384

READ_PREFIXES = ("SELECT", "EXPLAIN", "SHOW", "DESCRIBE", "WITH", "VALUES")

_ASCII_UPPER = str.maketrans(
    "abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)


class RejectionKind(Enum):
    """Why a query was refused, mirroring the status reported to the client."""

    INVALID_ARGUMENT = "invalid_argument"
    UNIMPLEMENTED = "unimplemented"


class QueryRejected(ValueError):
    """Raised when a query is refused before it is planned or run."""

    def __init__(self, kind: RejectionKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


def validate_read_only(query: str) -> None:
    """Accept only statements that start with a read-only keyword.

    Leading whitespace is ignored and the comparison is ASCII case-insensitive.
    """
    head = query.lstrip().translate(_ASCII_UPPER)
    if not head.startswith(READ_PREFIXES):
        raise QueryRejected(
            RejectionKind.UNIMPLEMENTED,
            "only read-only queries (SELECT, EXPLAIN, SHOW, DESCRIBE, WITH, VALUES) "
            "are supported",
        )


def validate_query(query: str | bytes | bytearray | memoryview) -> str:
    """Check a query or an encoded statement handle and return the query text.

    Bytes must be valid UTF-8. The encoded query may be at most
    ``MAX_QUERY_LENGTH`` bytes and must be read-only.
    """
    if isinstance(query, str):
        text = query
    else:
        try:
            text = bytes(query).decode("utf-8")
        except UnicodeDecodeError:
            raise QueryRejected(
                RejectionKind.INVALID_ARGUMENT,
                "statement handle is not valid UTF-8",
            ) from None
    if len(text.encode("utf-8")) > MAX_QUERY_LENGTH:
        raise QueryRejected(
            RejectionKind.INVALID_ARGUMENT,
            f"query exceeds maximum length of {MAX_QUERY_LENGTH} bytes",
        )
    validate_read_only(text)
    return text