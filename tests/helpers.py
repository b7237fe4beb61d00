"""Shared builders for HTTP-level tests."""

import json

import httpx


def make_page(records: list, page: int = 1, has_next: bool = False) -> dict:
    """Build a patients page body as the API returns it."""
    return {
        "data": records,
        "pagination": {
            "page": page,
            "limit": len(records),
            "total": 50,
            "totalPages": 10,
            "hasNext": has_next,
            "hasPrevious": page > 1,
        },
    }


def json_response(status: int, body: object) -> httpx.Response:
    return httpx.Response(
        status,
        content=json.dumps(body).encode(),
        headers={"content-type": "application/json"},
    )


class RecordingSleep:
    """Stand-in for time.sleep that only records requested delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
