"""Client Errors — typed failures surfaced by PortfolioApiClient.

Invariants:
    - ApiError.status is the HTTP status for server answers, None for transport failures
    - ApiError.errors carries the server's per-field detail when present
"""


class ApiError(Exception):
    """Non-2xx response (or no response at all)."""

    def __init__(
        self,
        status: int | None,
        message: str,
        errors: list[dict] | None = None,
    ):
        super().__init__(message)
        self.status = status
        self.message = message
        self.errors = errors or []

    @property
    def is_server_error(self) -> bool:
        return self.status is not None and self.status >= 500

    def field_errors(self) -> dict[str, str]:
        """Per-field messages keyed by field name, for inline form display."""
        return {
            e["field"]: e["message"]
            for e in self.errors
            if "field" in e and "message" in e
        }


class ApiTimeoutError(ApiError):
    """Request exceeded the client timeout."""

    def __init__(self, message: str = "Request timed out"):
        super().__init__(None, message)


class ApiConnectionError(ApiError):
    """Server unreachable (DNS, refused connection, reset)."""

    def __init__(self, message: str = "Network error occurred"):
        super().__init__(None, message)
