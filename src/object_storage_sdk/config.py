"""Configuration for the Object Storage SDK.

Uses Pydantic v2 for validation with sensible defaults. Credentials accept
both snake_case names and the camelCase keys found in service bindings.
"""

from __future__ import annotations

import json
import os
from enum import StrEnum
from typing import Annotated, Any, Mapping, Self

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    SecretStr,
    ValidationError,
)

from .errors import InvalidConfigError

DEFAULT_IDENTITY_URL = "https://identity.open.softlayer.com/v3/auth/tokens"
VCAP_SERVICE_NAME = "Object-Storage"


class Region(StrEnum):
    """Region base URLs; the project id is appended to form the account URL."""

    DALLAS = "https://dal.objectstorage.open.softlayer.com:443/v1/AUTH_"
    LONDON = "https://lon.objectstorage.open.softlayer.com:443/v1/AUTH_"

    @classmethod
    def from_name(cls, name: str) -> Region:
        """Map a region identifier to its base URL, defaulting to DALLAS."""
        if name.strip().upper() == "LONDON":
            return cls.LONDON
        return cls.DALLAS

    @classmethod
    def from_binding_name(cls, name: str) -> Region:
        """Map a service binding's region, where only ``dallas`` selects DALLAS."""
        if name.strip().upper() == "DALLAS":
            return cls.DALLAS
        return cls.LONDON


class Credentials(BaseModel):
    """Identity credentials for one object storage project."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    user_id: str = Field(..., min_length=1, validation_alias=AliasChoices("user_id", "userId"))
    password: SecretStr
    project_id: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("project_id", "projectId")
    )
    region: str = Field(default="dallas", min_length=1)

    @property
    def region_url(self) -> str:
        """Region base URL; explicit URLs are used verbatim."""
        if self.region.startswith(("http://", "https://")):
            return self.region
        return Region.from_name(self.region).value

    @property
    def account_url(self) -> str:
        """Base resource URL of the account."""
        return f"{self.region_url}{self.project_id}"

    @classmethod
    def from_vcap_services(cls, env: Mapping[str, str] | None = None) -> Self:
        """Load credentials from the first bound Object-Storage service.

        A binding region other than ``dallas`` selects the London endpoint.

        Args:
            env: Environment mapping (defaults to ``os.environ``).

        Raises:
            InvalidConfigError: If no usable binding is found.
        """
        env = os.environ if env is None else env
        raw = env.get("VCAP_SERVICES")
        if not raw:
            msg = "No credentials for Object Storage instance found"
            raise InvalidConfigError(msg, field="VCAP_SERVICES")

        try:
            services = json.loads(raw)
        except ValueError as e:
            msg = "VCAP_SERVICES is not valid JSON"
            raise InvalidConfigError(msg, field="VCAP_SERVICES") from e

        instances = services.get(VCAP_SERVICE_NAME) or []
        credentials = instances[0].get("credentials") if instances else None
        if not credentials or not isinstance(credentials, dict):
            msg = "No credentials for Object Storage instance found"
            raise InvalidConfigError(msg, field="VCAP_SERVICES")

        credentials = dict(credentials)
        region = credentials.get("region")
        if isinstance(region, str) and not region.startswith(("http://", "https://")):
            credentials["region"] = Region.from_binding_name(region).value

        try:
            return cls.model_validate(credentials)
        except ValidationError as e:
            msg = f"Invalid Object Storage credentials: {e.error_count()} error(s)"
            raise InvalidConfigError(msg, field="credentials") from e


class TelemetryConfig(BaseModel):
    """Logging and tracing configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    service_name: str = "object-storage-sdk"
    log_level: str = "INFO"


class ObjectStorageConfig(BaseModel):
    """Main configuration for the Object Storage SDK."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    identity_url: HttpUrl = DEFAULT_IDENTITY_URL  # type: ignore[assignment]

    # HTTP settings
    timeout: Annotated[float, Field(gt=0, le=300)] = 30.0
    connect_timeout: Annotated[float, Field(gt=0, le=60)] = 10.0
    user_agent: str = "object-storage-sdk/0.1.0 Python"

    # Tokens are renewed once this close to their expiration
    refresh_margin_seconds: Annotated[int, Field(ge=0)] = 600

    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    @property
    def identity_url_str(self) -> str:
        """Identity endpoint as a plain string."""
        return str(self.identity_url)

    def with_overrides(self, **kwargs: Any) -> Self:
        """Create new config with overridden values."""
        data = self.model_dump()
        data.update(kwargs)
        return self.__class__(**data)

    @classmethod
    def from_env(cls, prefix: str = "OBJECT_STORAGE_") -> Self:
        """Create config from environment variables."""

        def get_env(key: str, default: Any = None) -> Any:
            return os.environ.get(f"{prefix}{key}", default)

        return cls(
            identity_url=get_env("IDENTITY_URL", DEFAULT_IDENTITY_URL),
            timeout=float(get_env("TIMEOUT", "30.0")),
            connect_timeout=float(get_env("CONNECT_TIMEOUT", "10.0")),
            refresh_margin_seconds=int(get_env("REFRESH_MARGIN_SECONDS", "600")),
            telemetry=TelemetryConfig(log_level=get_env("LOG_LEVEL", "INFO")),
        )
