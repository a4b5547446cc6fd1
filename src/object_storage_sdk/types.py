"""Type definitions for the Object Storage SDK."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StorageResponse:
    """Successful resource response.

    Header names are lower-cased. ``body`` is ``bytes`` when the request
    asked for raw encoding, text otherwise.
    """

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str | bytes = ""

    @property
    def content_type(self) -> str | None:
        """Content type reported by the server."""
        return self.headers.get("content-type")

    def headers_with_prefix(self, prefix: str) -> dict[str, str]:
        """Headers whose name starts with ``prefix`` (case-insensitive)."""
        prefix = prefix.lower()
        return {k: v for k, v in self.headers.items() if k.startswith(prefix)}
