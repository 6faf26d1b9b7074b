"""Turn Recipes API error bodies into one-line Locust failure messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

MAX_DETAIL = 300


def _joined(messages):
    return ", ".join(map(str, messages)) if isinstance(messages, list) else str(messages)


def extract_error_detail(response: Response) -> str:
    """Summarize an error body.

    The API answers with ``{"error": "..."}`` (404, 409), with
    ``{"error": {"field": ["..."]}}`` for domain validation (400), or with
    FastAPI's ``{"detail": [...]}`` when the request schema rejects it (422).
    """
    try:
        body = response.json()
    except ValueError:
        return (response.text or "(empty response body)")[:MAX_DETAIL]

    error = body.get("error")
    if isinstance(error, dict):
        return "; ".join(f"{field}: {_joined(msgs)}" for field, msgs in error.items())
    if error is not None:
        return str(error)

    detail = body.get("detail")
    if isinstance(detail, list):
        return "; ".join(f"{'.'.join(map(str, d.get('loc', [])))}: {d.get('msg')}" for d in detail)

    return str(body)[:MAX_DETAIL]
