"""HTTP client for the Obsidian Local REST API.

Only the read operations the vault cache needs are implemented here. Every
failure is translated into a ``VaultError`` subclass so that callers never
have to look at HTTP status codes.

Contract:
- Inputs: Base URL, API key, TLS and timeout settings
- Outputs: Parsed response models
- Side Effects: Network requests to the REST API
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..config.settings import VaultSettings
from ..errors import AuthError
from ..errors import ConfigurationError
from ..errors import ForbiddenError
from ..errors import InternalError
from ..errors import NotFoundError
from ..errors import ServiceUnavailableError
from ..errors import ValidationError
from ..errors import VaultError
from ..utils.paths import encode_vault_path
from .models import DirectoryListing
from .models import DocumentMetadata
from .models import NoteJson

logger = logging.getLogger(__name__)

NOTE_JSON_CONTENT_TYPE = "application/vnd.olrapi.note+json"


class ObsidianRestClient:
    """Async client for the Obsidian Local REST API plugin."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        verify_ssl: bool = False,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client.

        Args:
            base_url: REST API root, e.g. http://127.0.0.1:27123
            api_key: Bearer token configured in the plugin
            verify_ssl: Whether to verify TLS certificates
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)

        Raises:
            ConfigurationError: If the API key is empty
        """
        if not api_key:
            raise ConfigurationError("Obsidian API key is missing in configuration")

        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
            timeout=timeout,
            verify=verify_ssl,
            transport=transport,
        )
        logger.info(f"ObsidianRestClient initialized with base URL: {self.base_url}, verify SSL: {verify_ssl}")

    @classmethod
    def from_settings(cls, settings: VaultSettings) -> ObsidianRestClient:
        """Build a client from loaded settings."""
        return cls(
            settings.obsidian_base_url,
            settings.obsidian_api_key,
            verify_ssl=settings.obsidian_verify_ssl,
            timeout=settings.request_timeout_seconds,
        )

    async def _request(
        self,
        method: str,
        url: str,
        operation: str,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send a request and translate failures into VaultError.

        Args:
            method: HTTP method
            url: Path relative to the base URL
            operation: Operation name for log messages
            headers: Extra request headers

        Returns:
            The successful response

        Raises:
            VaultError: Subclass matching the failure kind
        """
        logger.debug(f"[{operation}] {method} {url}")
        try:
            response = await self.client.request(method, url, headers=headers)
        except httpx.TransportError as e:
            message = (
                f"Obsidian API network error on {method} {url}: {e}. "
                "Obsidian may not be running, or the Local REST API plugin is disabled."
            )
            logger.error(f"[{operation}] {message}")
            raise ServiceUnavailableError(message, details={"url": url, "method": method}) from e

        if response.is_success:
            return response

        details: dict[str, Any] = {
            "url": url,
            "method": method,
            "status": response.status_code,
        }
        error = _error_for_status(response, method, url, details)
        if isinstance(error, NotFoundError):
            # 404s are expected when probing for deleted documents
            logger.debug(f"[{operation}] {error}")
        else:
            logger.error(f"[{operation}] {error}")
        raise error

    async def list_directory(self, dir_path: str) -> list[str]:
        """List the entries of a vault directory.

        Args:
            dir_path: Vault-relative directory; "" or "/" for the root

        Returns:
            Entry names; subdirectories end with "/"
        """
        encoded = encode_vault_path(dir_path)
        url = f"/vault{encoded}/"
        response = await self._request("GET", url, "listDirectory")
        listing = _parse(DirectoryListing, response, url)
        return listing.files

    async def get_content(self, file_path: str) -> NoteJson:
        """Fetch a note's content and stat.

        Args:
            file_path: Vault-relative document path

        Returns:
            Parsed note
        """
        url = f"/vault{encode_vault_path(file_path)}"
        response = await self._request("GET", url, "getContent", headers={"Accept": NOTE_JSON_CONTENT_TYPE})
        return _parse(NoteJson, response, url)

    async def get_metadata(self, file_path: str) -> DocumentMetadata:
        """Fetch a note's timestamps with a HEAD request.

        The REST API reports ``x-obsidian-mtime`` and ``x-obsidian-ctime`` in
        seconds; they are converted to epoch milliseconds.

        Args:
            file_path: Vault-relative document path

        Returns:
            Metadata; fields are None when the header is absent
        """
        url = f"/vault{encode_vault_path(file_path)}"
        response = await self._request("HEAD", url, "getMetadata")
        headers = response.headers
        try:
            return DocumentMetadata(
                mtime=_seconds_header_to_ms(headers.get("x-obsidian-mtime")),
                ctime=_seconds_header_to_ms(headers.get("x-obsidian-ctime")),
                size=int(headers["content-length"]) if "content-length" in headers else None,
            )
        except ValueError as e:
            raise ValidationError(f"Malformed metadata headers for {url}: {e}", details={"url": url}) from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> ObsidianRestClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


def _error_for_status(response: httpx.Response, method: str, url: str, details: dict[str, Any]) -> VaultError:
    status = response.status_code
    if status == 404:
        return NotFoundError(f"Obsidian API Not Found: {url}", details=details)
    if status in (400, 405):
        return ValidationError(f"Obsidian API rejected {method} {url}: {response.text[:200]}", details=details)
    if status == 401:
        return AuthError("Obsidian API Unauthorized: invalid API key", details=details)
    if status == 403:
        return ForbiddenError("Obsidian API Forbidden: check permissions", details=details)
    if status == 503:
        return ServiceUnavailableError("Obsidian API Service Unavailable", details=details)
    return InternalError(f"Obsidian API request failed with status {status}: {method} {url}", details=details)


def _parse(model, response: httpx.Response, url: str):
    try:
        return model.model_validate_json(response.content)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Malformed response from {url}: {e.error_count()} validation error(s)",
            details={"url": url},
        ) from e


def _seconds_header_to_ms(value: str | None) -> int | None:
    if value is None or value == "":
        return None
    return int(float(value) * 1000)
