from __future__ import annotations

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vaultscout.azure.auth.config import AuthConfig
from vaultscout.azure.auth.scopes import ARM_DEFAULT_ENDPOINT, authority_from_url


class ExplorerConfig(BaseSettings):
    """Settings for one sign-in and key vault listing run.

    Environment variables (aliases supported where noted):
        - AZURE_RESOURCE_MANAGER_ENDPOINT
        - VAULTSCOUT_RESOURCE_GROUP
        - VAULTSCOUT_VAULT_PAGE_SIZE
        - VAULTSCOUT_FOLLOW_VAULT_PAGES
        - VAULTSCOUT_REQUEST_TIMEOUT

    Sign-in settings live on :class:`AuthConfig` and are read from their own
    ``AZURE_*`` variables.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    auth: AuthConfig = Field(default_factory=AuthConfig)
    arm_endpoint: str = Field(
        default=ARM_DEFAULT_ENDPOINT,
        validation_alias=AliasChoices(
            "arm_endpoint", "AZURE_RESOURCE_MANAGER_ENDPOINT"
        ),
    )
    resource_group: str | None = Field(
        default=None,
        validation_alias=AliasChoices("resource_group", "VAULTSCOUT_RESOURCE_GROUP"),
    )
    vault_page_size: int = Field(
        default=30,
        ge=1,
        le=1000,
        validation_alias=AliasChoices("vault_page_size", "VAULTSCOUT_VAULT_PAGE_SIZE"),
    )
    follow_vault_pages: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "follow_vault_pages", "VAULTSCOUT_FOLLOW_VAULT_PAGES"
        ),
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        validation_alias=AliasChoices("request_timeout", "VAULTSCOUT_REQUEST_TIMEOUT"),
    )

    @field_validator("arm_endpoint")
    @classmethod
    def _ensure_absolute_endpoint(cls, v: str) -> str:
        return authority_from_url(v)

    @field_validator("resource_group")
    @classmethod
    def _blank_resource_group_is_none(cls, v: str | None) -> str | None:
        """An empty ``-rg`` means the whole subscription."""
        if v is not None and not v.strip():
            return None
        return v
