"""Error taxonomy shared by the generation and job-search paths."""
from __future__ import annotations


class ResumatchError(Exception):
    http_status: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequest(ResumatchError):
    """Caller-supplied input is malformed; never forwarded upstream."""

    http_status = 400


class ConfigError(ResumatchError):
    """A required credential is missing from the environment."""

    http_status = 500


class UpstreamError(ResumatchError):
    """An external service errored or could not be reached."""

    http_status = 500

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"{self.message} (upstream status {self.status})"


class FormatError(ResumatchError):
    """Generated text could not be parsed; the request still succeeds with the raw text."""

    http_status = 200

    def __init__(self, raw: str) -> None:
        super().__init__("The AI returned a response in an unexpected format")
        self.raw = raw
