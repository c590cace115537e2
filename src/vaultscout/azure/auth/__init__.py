"""Device-code sign-in for Azure Resource Manager.

Public API:
- get_credential() → DeviceCodeCredential
- AuthConfig (settings)
- Credential (bearer token snapshot)
- ARM_DEFAULT_ENDPOINT (public cloud Azure Resource Manager)
- arm_scope_from_endpoint(), authority_from_url() (scope helpers)

The full sign-in sequence, including tenant discovery, is
:func:`vaultscout.azure.auth.acquirer.acquire`.
"""

from .config import AuthConfig
from .credential import Credential
from .factory import get_credential
from .scopes import ARM_DEFAULT_ENDPOINT, arm_scope_from_endpoint, authority_from_url

__all__ = [
    "AuthConfig",
    "Credential",
    "get_credential",
    "ARM_DEFAULT_ENDPOINT",
    "arm_scope_from_endpoint",
    "authority_from_url",
]
