"""
Unit tests for the Obsidian REST client.

Requests are served by httpx.MockTransport, so no server is needed.
"""

import httpx
import pytest

from vault_library.errors import AuthError
from vault_library.errors import ConfigurationError
from vault_library.errors import ForbiddenError
from vault_library.errors import InternalError
from vault_library.errors import NotFoundError
from vault_library.errors import ServiceUnavailableError
from vault_library.errors import ValidationError
from vault_library.remote import ObsidianRestClient

BASE_URL = "http://vault.test:27123"


def make_client(handler) -> ObsidianRestClient:
    return ObsidianRestClient(BASE_URL, "secret", transport=httpx.MockTransport(handler))


@pytest.mark.unit
class TestObsidianRestClient:
    """Test request construction and response parsing."""

    def test_requires_api_key(self) -> None:
        """Test a missing API key is a configuration error."""
        with pytest.raises(ConfigurationError):
            ObsidianRestClient(BASE_URL, "")

    async def test_list_directory_root(self) -> None:
        """Test the root is listed at /vault/ with the bearer token."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"files": ["Note.md", "Folder/"]})

        async with make_client(handler) as client:
            entries = await client.list_directory("/")

        assert entries == ["Note.md", "Folder/"]
        assert seen[0].url.path == "/vault/"
        assert seen[0].headers["Authorization"] == "Bearer secret"

    async def test_list_directory_encodes_path(self) -> None:
        """Test subdirectory paths are percent-encoded per component."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"files": []})

        async with make_client(handler) as client:
            await client.list_directory("/My Notes/Daily")

        assert seen[0].url.raw_path == b"/vault/My%20Notes/Daily/"

    async def test_get_content_parses_note_json(self) -> None:
        """Test content requests ask for note JSON and parse content and stat."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "content": "# Title",
                    "path": "Notes/Title.md",
                    "stat": {"ctime": 1000, "mtime": 2000, "size": 7},
                    "tags": ["a"],
                    "frontmatter": {},
                },
            )

        async with make_client(handler) as client:
            note = await client.get_content("Notes/Title.md")

        assert note.content == "# Title"
        assert note.stat.mtime == 2000
        assert seen[0].headers["Accept"] == "application/vnd.olrapi.note+json"
        assert seen[0].url.path == "/vault/Notes/Title.md"

    async def test_get_metadata_converts_seconds_to_ms(self) -> None:
        """Test timestamp headers are reported in epoch milliseconds."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "HEAD"
            return httpx.Response(200, headers={"x-obsidian-mtime": "1700000000.5", "x-obsidian-ctime": "1600000000"})

        async with make_client(handler) as client:
            metadata = await client.get_metadata("Note.md")

        assert metadata.mtime == 1_700_000_000_500
        assert metadata.ctime == 1_600_000_000_000

    async def test_get_metadata_without_headers(self) -> None:
        """Test missing timestamp headers leave mtime unset."""
        async with make_client(lambda request: httpx.Response(200)) as client:
            metadata = await client.get_metadata("Note.md")

        assert metadata.mtime is None

    @pytest.mark.parametrize(
        ("status", "error_type"),
        [
            (404, NotFoundError),
            (400, ValidationError),
            (405, ValidationError),
            (401, AuthError),
            (403, ForbiddenError),
            (503, ServiceUnavailableError),
            (500, InternalError),
        ],
    )
    async def test_status_mapping(self, status: int, error_type: type) -> None:
        """Test HTTP failures become the matching VaultError."""
        async with make_client(lambda request: httpx.Response(status, text="nope")) as client:
            with pytest.raises(error_type) as exc_info:
                await client.get_content("Note.md")

        assert exc_info.value.details["status"] == status

    async def test_network_error_is_service_unavailable(self) -> None:
        """Test transport failures are reported as ServiceUnavailableError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(ServiceUnavailableError, match="Obsidian may not be running"):
                await client.list_directory("/")

    async def test_malformed_response_is_validation_error(self) -> None:
        """Test a response missing required fields raises ValidationError."""
        async with make_client(lambda request: httpx.Response(200, json={"content": "x"})) as client:
            with pytest.raises(ValidationError, match="Malformed response"):
                await client.get_content("Note.md")
