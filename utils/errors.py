"""HTTP errors carrying a machine-readable code."""

from __future__ import annotations

from werkzeug.exceptions import BadRequest


class ValidationError(BadRequest):
    """400 error raised for malformed, missing or weak input."""

    def __init__(self, description: str, error_code: str | None = None) -> None:
        super().__init__(description)
        self.error_code = error_code
