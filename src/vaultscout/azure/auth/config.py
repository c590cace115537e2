from __future__ import annotations

from typing import Final
from uuid import UUID

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .scopes import authority_from_url

# Public client id of the Azure CLI; usable by anyone without an app registration.
AZURE_CLI_CLIENT_ID: Final[str] = "04b07795-8ddb-461a-bbee-02f9e1bf7b46"

COMMON_TENANT: Final[str] = "common"


class AuthConfig(BaseSettings):
    """Configuration for the device-code sign-in.

    Environment variables (aliases supported where noted):
        - AZURE_TENANT_ID
        - AZURE_CLIENT_ID
        - AZURE_AUTHORITY_HOST
        - AZURE_DEVICE_CODE_TIMEOUT
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    # With validation_alias set, the field name is only accepted when it is
    # listed in the alias choices too.

    tenant_id: str = Field(
        default=COMMON_TENANT,
        validation_alias=AliasChoices("tenant_id", "AZURE_TENANT_ID"),
    )
    client_id: str = Field(
        default=AZURE_CLI_CLIENT_ID,
        validation_alias=AliasChoices("client_id", "AZURE_CLIENT_ID"),
    )
    authority: str | None = Field(
        default=None,
        validation_alias=AliasChoices("authority", "AZURE_AUTHORITY_HOST"),
    )
    device_code_timeout: int | None = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices(
            "device_code_timeout", "AZURE_DEVICE_CODE_TIMEOUT"
        ),
    )

    @field_validator("client_id")
    @classmethod
    def _ensure_uuid(cls, v: str) -> str:
        """Client ids are GUIDs; normalise to the canonical lower-case form."""
        try:
            return str(UUID(v))
        except ValueError as exc:
            raise ValueError(f"client_id is not a valid UUID: {v!r}") from exc

    @field_validator("authority")
    @classmethod
    def _ensure_absolute_authority(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return authority_from_url(v)
