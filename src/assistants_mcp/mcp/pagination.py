"""Cursor-based pagination shared by every MCP list method.

Cursors are opaque to clients: URL-safe base64 of a compact JSON object
``{"v": 1, "index": ..., "total": ..., "timestamp": ...}``. A cursor is only
valid for the listing it was produced from; anything malformed, expired,
foreign, or of another schema version is rejected with InvalidCursorError
rather than reinterpreted.

Example:
    >>> page = paginate(list(range(25)), page_size=10)
    >>> page.items[:3], page.has_more
    ([0, 1, 2], True)
    >>> paginate(list(range(25)), cursor=page.next_cursor, page_size=10).items[0]
    10
"""

from __future__ import annotations

import base64
import binascii
import json
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from assistants_mcp.errors import InvalidCursorError

T = TypeVar("T")

CURSOR_VERSION = 1

DEFAULT_PAGE_SIZE = 10
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 50

CURSOR_EXPIRY_SECONDS = 60 * 60


class CursorState(BaseModel):
    """Decoded pagination position."""

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    v: int = Field(default=CURSOR_VERSION, description="Cursor schema version")
    index: int = Field(description="Index of the first item of the next page")
    total: int = Field(description="Size of the listing the cursor was issued for")
    timestamp: float = Field(description="Issue time, seconds since the epoch")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a paginated listing."""

    items: list[T]
    next_cursor: str | None
    total: int

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None


def encode_cursor(state: CursorState) -> str:
    """Encode a cursor state into an opaque token."""
    raw = json.dumps(state.model_dump(), separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def decode_cursor(
    token: str,
    *,
    expected_total: int | None = None,
    now: float | None = None,
) -> CursorState:
    """Decode and verify an opaque cursor token.

    Args:
        token: Cursor previously returned as ``nextCursor``.
        expected_total: Size of the current listing; a cursor issued for a
            listing of a different size is foreign and rejected.
        now: Current time in seconds (defaults to ``time.time()``).

    Raises:
        InvalidCursorError: If the token is malformed, expired, foreign,
            negative, out of range, or of an unknown version.
    """
    if not isinstance(token, str) or not token:
        raise InvalidCursorError(str(token), "cursor must be a non-empty string")

    try:
        raw = base64.urlsafe_b64decode(token.encode("ascii"))
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise InvalidCursorError(token, f"cursor is not decodable: {e}") from e

    if not isinstance(data, dict):
        raise InvalidCursorError(token, "cursor payload is not an object")
    if data.get("v") != CURSOR_VERSION:
        raise InvalidCursorError(token, f"unsupported cursor version: {data.get('v')!r}")

    try:
        state = CursorState.model_validate(data)
    except PydanticValidationError as e:
        raise InvalidCursorError(token, "invalid cursor structure") from e

    if state.index < 0:
        raise InvalidCursorError(token, "negative index")
    if state.index > state.total:
        raise InvalidCursorError(token, "index beyond end of listing")

    current = time.time() if now is None else now
    if current - state.timestamp > CURSOR_EXPIRY_SECONDS:
        raise InvalidCursorError(token, "cursor has expired")

    if expected_total is not None and state.total != expected_total:
        raise InvalidCursorError(token, "cursor was issued for a different listing")

    return state


def normalize_page_size(page_size: int | None) -> int:
    """Clamp a requested page size into [MIN_PAGE_SIZE, MAX_PAGE_SIZE]."""
    if page_size is None:
        return DEFAULT_PAGE_SIZE
    return max(MIN_PAGE_SIZE, min(MAX_PAGE_SIZE, page_size))


def paginate(
    items: Sequence[T],
    cursor: str | None = None,
    page_size: int | None = DEFAULT_PAGE_SIZE,
) -> Page[T]:
    """Return the page of ``items`` starting at ``cursor``.

    ``next_cursor`` is set iff more items remain. Following cursors from an
    empty start yields disjoint pages that together cover ``items`` exactly,
    as long as the listing is unchanged between calls.
    """
    total = len(items)
    size = normalize_page_size(page_size)
    start = 0
    if cursor is not None:
        start = decode_cursor(cursor, expected_total=total).index

    end = min(start + size, total)
    next_cursor = None
    if end < total:
        next_cursor = encode_cursor(CursorState(index=end, total=total, timestamp=time.time()))
    return Page(items=list(items[start:end]), next_cursor=next_cursor, total=total)
