"""
Unit tests for vault path helpers.
"""

import pytest

from vault_library.utils.paths import child_dir_path
from vault_library.utils.paths import document_key
from vault_library.utils.paths import encode_vault_path
from vault_library.utils.paths import folder_prefix
from vault_library.utils.paths import join_vault_path
from vault_library.utils.paths import normalize_dir_path


@pytest.mark.unit
class TestNormalizeDirPath:
    """Test directory normalization used by the vault scan."""

    @pytest.mark.parametrize("spelling", ["", "/", ".", " / "])
    def test_root_spellings_are_equal(self, spelling: str) -> None:
        """Test every spelling of the root normalizes to '/'."""
        assert normalize_dir_path(spelling) == "/"

    def test_collapses_dot_segments(self) -> None:
        """Test '.', '..' and trailing slashes are resolved."""
        assert normalize_dir_path("Notes/Daily/") == "/Notes/Daily"
        assert normalize_dir_path("/Notes/./Daily/../Daily") == "/Notes/Daily"

    def test_child_that_names_itself_resolves_to_parent(self) -> None:
        """Test './' and '../' children resolve to already known directories."""
        assert child_dir_path("/Notes", "./") == "/Notes"
        assert child_dir_path("/Notes/Daily", "../") == "/Notes"
        assert child_dir_path("/", "../") == "/"


@pytest.mark.unit
class TestDocumentKeys:
    """Test cache keys for documents."""

    def test_document_key_strips_leading_slash(self) -> None:
        """Test keys never carry a leading slash."""
        assert document_key("/Notes/Note.md") == "Notes/Note.md"
        assert document_key("Note.md") == "Note.md"

    def test_join_vault_path(self) -> None:
        """Test joining a directory and file entry."""
        assert join_vault_path("/", "Note.md") == "Note.md"
        assert join_vault_path("/Notes", "Daily.md") == "Notes/Daily.md"

    def test_keys_are_case_sensitive(self) -> None:
        """Test case is preserved."""
        assert document_key("Notes/README.md") != document_key("notes/readme.md")


@pytest.mark.unit
class TestEncodeVaultPath:
    """Test URL encoding of vault paths."""

    def test_root_encodes_to_empty(self) -> None:
        assert encode_vault_path("/") == ""
        assert encode_vault_path("") == ""

    def test_components_are_encoded_separately(self) -> None:
        """Test spaces and reserved characters are escaped but separators kept."""
        assert encode_vault_path("Notes/My File.md") == "/Notes/My%20File.md"
        assert encode_vault_path("/A#B/C?.md") == "/A%23B/C%3F.md"


@pytest.mark.unit
class TestFolderPrefix:
    """Test folder filters used by search and entry listing."""

    @pytest.mark.parametrize("spelling", ["Notes", "/Notes", "Notes/", " /Notes/ "])
    def test_ends_with_separator(self, spelling: str) -> None:
        assert folder_prefix(spelling) == "Notes/"

    @pytest.mark.parametrize("spelling", [None, "", "/"])
    def test_root_means_no_filter(self, spelling: str | None) -> None:
        assert folder_prefix(spelling) == ""

    def test_sibling_folder_not_matched(self) -> None:
        assert not "NotesArchive/b.md".startswith(folder_prefix("Notes"))
