from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

import requests

from vaultscout.azure.auth.credential import Credential
from vaultscout.azure.auth.scopes import ARM_DEFAULT_ENDPOINT, authority_from_url
from vaultscout.errors import AuthError, FetchError

from .models import Page

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ArmClient:
    """Authenticated GET requests against Azure Resource Manager."""

    def __init__(
        self,
        credential: Credential,
        *,
        endpoint: str = ARM_DEFAULT_ENDPOINT,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        """Initialize the ARM client.

        Args:
            credential: Bearer token sent with every request.
            endpoint: ARM endpoint; only its scheme and host are used.
            timeout: Seconds to wait for each response.
            session: HTTP session to reuse. A new one is created if omitted.
        """
        self._credential = credential
        self._endpoint = authority_from_url(endpoint)
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def credential(self) -> Credential:
        return self._credential

    def url_for(self, path: str) -> str:
        return f"{self._endpoint}/{path.lstrip('/')}"

    def get(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET ``url`` and return the decoded JSON body.

        Raises:
            AuthError: If the credential has already expired.
            FetchError: On transport errors, non-2xx responses and bodies that
                are not JSON.
        """
        if self._credential.is_expired():
            raise AuthError("The access token has expired; sign in again.")

        try:
            response = self._session.get(
                url,
                headers=self._credential.authorization_header,
                params=params,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise FetchError(f"Request to {url} failed: {exc}", url=url) from exc

        if response.status_code >= 400:
            raise FetchError(
                f"Azure Resource Manager returned {response.status_code}: "
                f"{_error_message(response)}",
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(
                f"Response from {url} is not JSON", url=url, status_code=response.status_code
            ) from exc

    def fetch_page(
        self,
        path: str,
        parse: Callable[[dict[str, Any]], T],
        *,
        api_version: str,
        top: int | None = None,
    ) -> Page[T]:
        """Fetch the first page of an ARM list operation."""
        params: dict[str, Any] = {"api-version": api_version}
        if top is not None:
            params["$top"] = top
        return _to_page(self.get(self.url_for(path), params=params), parse)

    def fetch_next(self, page: Page[Any], parse: Callable[[dict[str, Any]], T]) -> Page[T]:
        """Fetch the page after ``page``.

        The ``nextLink`` already carries the api-version and any filters.
        """
        if page.next_link is None:
            raise ValueError("page has no nextLink")
        return _to_page(self.get(page.next_link), parse)


def _to_page(payload: dict[str, Any], parse: Callable[[dict[str, Any]], T]) -> Page[T]:
    return Page(
        items=[parse(value) for value in payload.get("value", [])],
        next_link=payload.get("nextLink") or None,
    )


def _error_message(response: requests.Response) -> str:
    """Best-effort extraction of the ARM error message."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason or "no details"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        code = error.get("code")
        message = error.get("message", "")
        return f"{code}: {message}" if code else message
    return response.text or "no details"
