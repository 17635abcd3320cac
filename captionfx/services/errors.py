"""Shared error types for caption rendering."""

from __future__ import annotations

from typing import Optional


def error_payload(code: str, message: str, hint: Optional[str] = None) -> dict:
    """Return a user-safe error payload."""
    payload = {"code": code, "message": message}
    if hint:
        payload["hint"] = hint
    return payload


class CaptionError(ValueError):
    """Exception carrying a user-facing error payload."""

    code = "CAPTION_ERROR"

    def __init__(self, message: str, hint: Optional[str] = None) -> None:
        super().__init__(message)
        self.error_payload = error_payload(self.code, message, hint)


class InvalidColorFormat(CaptionError):
    code = "INVALID_COLOR"


class EmptyCue(CaptionError):
    code = "EMPTY_CUE"


class InvalidStyleValue(CaptionError):
    code = "INVALID_STYLE"


class UnknownAnimation(CaptionError):
    code = "UNKNOWN_ANIMATION"
