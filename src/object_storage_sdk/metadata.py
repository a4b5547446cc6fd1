"""Metadata header prefixes for accounts, containers and objects."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Mapping


class MetadataLevel(StrEnum):
    """Resource level a metadata key is namespaced to."""

    ACCOUNT = "account"
    CONTAINER = "container"
    OBJECT = "object"

    @property
    def header_prefix(self) -> str:
        """Prefix of metadata headers read back from HEAD responses."""
        return f"x-{self.value}"

    @property
    def meta_prefix(self) -> str:
        """Prefix for setting metadata, e.g. ``X-Container-Meta-``."""
        return f"X-{self.value.capitalize()}-Meta-"

    @property
    def remove_prefix(self) -> str:
        """Prefix for removing metadata, e.g. ``X-Remove-Container-Meta-``."""
        return f"X-Remove-{self.value.capitalize()}-Meta-"


def update_headers(level: MetadataLevel, metadata: Mapping[str, Any]) -> dict[str, str]:
    """Headers that create or update ``metadata`` at ``level``."""
    return {f"{level.meta_prefix}{key}": str(value) for key, value in metadata.items()}


def remove_headers(level: MetadataLevel, metadata: Mapping[str, Any]) -> dict[str, str]:
    """Headers that remove the keys of ``metadata`` at ``level``."""
    return {f"{level.remove_prefix}{key}": str(value) for key, value in metadata.items()}


def stored_key(level: MetadataLevel, key: str) -> str:
    """Lower-cased header name under which a metadata key is reported."""
    return f"{level.meta_prefix}{key}".lower()
