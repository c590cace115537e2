from __future__ import annotations

import logging
from typing import Any, Callable

from azure.identity import DeviceCodeCredential

from .config import AuthConfig

logger = logging.getLogger(__name__)


def get_credential(
    config: AuthConfig | None = None,
    *,
    write: Callable[[str], Any] = print,
) -> DeviceCodeCredential:
    """Construct a :class:`DeviceCodeCredential` based on :class:`AuthConfig`.

    The credential is allowed to request tokens for any tenant so that, after
    the first interactive sign-in against the generic directory, a token for
    the discovered tenant can be obtained silently from the same cache.

    Args:
        config: Auth configuration. If ``None``, defaults are read from the
            environment.
        write: Receives the human-readable device-code instructions.

    Returns:
        A device-code credential. No network traffic happens until the first
        ``get_token`` call.
    """
    cfg = config or AuthConfig()

    def _prompt(verification_uri: str, user_code: str, expires_on: Any) -> None:
        logger.debug("Device code issued, expires on %s", expires_on)
        write(
            f"To sign in, use a web browser to open the page {verification_uri} "
            f"and enter the code {user_code} to authenticate."
        )

    kwargs: dict[str, Any] = {
        "tenant_id": cfg.tenant_id,
        "client_id": cfg.client_id,
        "prompt_callback": _prompt,
        "additionally_allowed_tenants": ["*"],
    }
    if cfg.authority is not None:
        kwargs["authority"] = cfg.authority
    if cfg.device_code_timeout is not None:
        kwargs["timeout"] = cfg.device_code_timeout

    return DeviceCodeCredential(**kwargs)
