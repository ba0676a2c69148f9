"""Helpers shared by the vehicle data source clients."""

import re

import httpx

_WHITESPACE = re.compile(r"\s+")


def normalize_registration(registration: str) -> str:
    """Trim, upper-case and strip all whitespace from a registration mark."""
    return _WHITESPACE.sub("", registration.strip().upper())


def safe_error_message(response: httpx.Response) -> str:
    """Short single-line description of an error response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        for key in ("message", "error_description", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return " ".join(value.split())[:200]
        errors = payload.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            detail = errors[0].get("detail") or errors[0].get("title")
            if isinstance(detail, str) and detail.strip():
                return " ".join(detail.split())[:200]

    raw_text = response.text.strip()
    if raw_text:
        return " ".join(raw_text.split())[:200]
    return "Request failed without an error payload"
