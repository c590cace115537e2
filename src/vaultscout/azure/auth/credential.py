from __future__ import annotations

import time
from dataclasses import dataclass, field

from azure.core.credentials import AccessToken


@dataclass(frozen=True)
class Credential:
    """A bearer token snapshot.

    Issued once for the generic directory, then superseded by a new instance
    scoped to the discovered tenant. Never mutated.
    """

    token: str = field(repr=False)
    expires_on: int
    tenant_id: str | None = None

    @classmethod
    def from_access_token(
        cls, access_token: AccessToken, tenant_id: str | None = None
    ) -> "Credential":
        return cls(
            token=access_token.token,
            expires_on=int(access_token.expires_on),
            tenant_id=tenant_id,
        )

    @property
    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    def is_expired(self, now: float | None = None) -> bool:
        now = time.time() if now is None else now
        return now >= self.expires_on
