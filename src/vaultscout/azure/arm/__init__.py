"""Azure Resource Manager listings.

Public API:
- ArmClient (authenticated GETs)
- enumerate_pages(), PageEnumerator, drain() (streamed pagination)
- list_tenants(), list_subscriptions(), list_vaults()
- Page, Tenant, Subscription, Vault (models)
"""

from .client import ArmClient
from .listings import list_subscriptions, list_tenants, list_vaults
from .models import Page, Subscription, Tenant, Vault
from .paging import PageEnumerator, drain, enumerate_pages

__all__ = [
    "ArmClient",
    "PageEnumerator",
    "enumerate_pages",
    "drain",
    "list_tenants",
    "list_subscriptions",
    "list_vaults",
    "Page",
    "Tenant",
    "Subscription",
    "Vault",
]
