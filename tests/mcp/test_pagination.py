"""Tests for cursor-based pagination."""

import base64
import json
import time

import pytest

from assistants_mcp.errors import InvalidCursorError
from assistants_mcp.mcp.pagination import (
    CURSOR_EXPIRY_SECONDS,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    CursorState,
    decode_cursor,
    encode_cursor,
    normalize_page_size,
    paginate,
)


def _raw_cursor(payload: object) -> str:
    return base64.urlsafe_b64encode(json.dumps(payload).encode()).decode()


class TestPaginate:
    """Tests for paginate()."""

    def test_first_page_of_22(self) -> None:
        items = list(range(22))
        page = paginate(items)
        assert page.items == list(range(10))
        assert page.total == 22
        assert page.has_more
        assert page.next_cursor is not None

    def test_following_cursors_covers_listing_exactly(self) -> None:
        items = [f"tool-{i}" for i in range(22)]
        seen: list[str] = []
        cursor = None
        pages = 0
        while True:
            page = paginate(items, cursor)
            seen.extend(page.items)
            pages += 1
            if page.next_cursor is None:
                break
            cursor = page.next_cursor
        assert seen == items
        assert pages == 3

    def test_last_page_has_no_cursor(self) -> None:
        page = paginate(list(range(10)))
        assert page.next_cursor is None
        assert not page.has_more

    def test_empty_listing(self) -> None:
        page = paginate([])
        assert page.items == []
        assert page.next_cursor is None
        assert page.total == 0

    def test_custom_page_size(self) -> None:
        page = paginate(list(range(9)), page_size=3)
        assert page.items == [0, 1, 2]
        second = paginate(list(range(9)), page.next_cursor, page_size=3)
        assert second.items == [3, 4, 5]

    def test_cursor_from_other_listing_rejected(self) -> None:
        cursor = paginate(list(range(22))).next_cursor
        with pytest.raises(InvalidCursorError) as exc_info:
            paginate(list(range(9)), cursor)
        assert exc_info.value.reason == "cursor was issued for a different listing"

    def test_empty_cursor_rejected(self) -> None:
        with pytest.raises(InvalidCursorError):
            paginate(list(range(25)), "", page_size=10)


class TestNormalizePageSize:
    @pytest.mark.parametrize(
        ("requested", "expected"),
        [(None, DEFAULT_PAGE_SIZE), (0, 1), (-5, 1), (25, 25), (1000, MAX_PAGE_SIZE)],
    )
    def test_clamps(self, requested: int | None, expected: int) -> None:
        assert normalize_page_size(requested) == expected


class TestDecodeCursor:
    """Malformed, expired, and foreign cursors are rejected."""

    def test_valid_cursor(self) -> None:
        now = time.time()
        token = encode_cursor(CursorState(index=10, total=22, timestamp=now))
        state = decode_cursor(token, expected_total=22, now=now)
        assert state.index == 10
        assert state.total == 22

    def test_expired_cursor(self) -> None:
        issued = time.time() - CURSOR_EXPIRY_SECONDS - 1
        token = encode_cursor(CursorState(index=10, total=22, timestamp=issued))
        with pytest.raises(InvalidCursorError, match="Invalid pagination cursor") as exc_info:
            decode_cursor(token)
        assert exc_info.value.reason == "cursor has expired"

    def test_not_base64(self) -> None:
        with pytest.raises(InvalidCursorError):
            decode_cursor("!!!not-a-cursor!!!")

    def test_not_json(self) -> None:
        token = base64.urlsafe_b64encode(b"hello").decode()
        with pytest.raises(InvalidCursorError):
            decode_cursor(token)

    def test_not_an_object(self) -> None:
        with pytest.raises(InvalidCursorError) as exc_info:
            decode_cursor(_raw_cursor([1, 2, 3]))
        assert exc_info.value.reason == "cursor payload is not an object"

    def test_unknown_version(self) -> None:
        token = _raw_cursor({"v": 99, "index": 1, "total": 5, "timestamp": time.time()})
        with pytest.raises(InvalidCursorError) as exc_info:
            decode_cursor(token)
        assert "unsupported cursor version" in exc_info.value.reason

    def test_negative_index(self) -> None:
        token = _raw_cursor({"v": 1, "index": -1, "total": 5, "timestamp": time.time()})
        with pytest.raises(InvalidCursorError) as exc_info:
            decode_cursor(token)
        assert exc_info.value.reason == "negative index"

    def test_index_beyond_total(self) -> None:
        token = _raw_cursor({"v": 1, "index": 6, "total": 5, "timestamp": time.time()})
        with pytest.raises(InvalidCursorError):
            decode_cursor(token)

    def test_wrong_field_types(self) -> None:
        token = _raw_cursor({"v": 1, "index": "3", "total": 5, "timestamp": time.time()})
        with pytest.raises(InvalidCursorError) as exc_info:
            decode_cursor(token)
        assert exc_info.value.reason == "invalid cursor structure"

    def test_empty_token(self) -> None:
        with pytest.raises(InvalidCursorError):
            decode_cursor("")

    def test_error_maps_to_invalid_params(self) -> None:
        with pytest.raises(InvalidCursorError) as exc_info:
            decode_cursor("garbage")
        payload = exc_info.value.to_jsonrpc()
        assert payload["code"] == -32602
        assert payload["data"]["category"] == "invalid_cursor"
