"""Tests for on-disk upload storage."""

import pytest

from projektmester.services.file_storage_service import (
    InvalidStoredNameError,
    stored_name_from_locator,
)


class TestFileStorage:
    """Tests for FileStorage."""

    def test_save_writes_payload(self, file_storage):
        """Should store content under a unique name and return a locator."""
        stored = file_storage.save("alaprajz v2.pdf", b"%PDF-1.4 test", "application/pdf")

        assert stored.filename == "alaprajz v2.pdf"
        assert stored.file_path == f"/files/{stored.stored_name}"
        assert stored.stored_name.startswith("alaprajz_v2-")
        assert stored.stored_name.endswith(".pdf")
        assert stored.size == len(b"%PDF-1.4 test")
        assert stored.file_type == "application/pdf"
        assert file_storage.open_path(stored.stored_name).read_bytes() == b"%PDF-1.4 test"

    def test_names_are_unique(self, file_storage):
        """Should not overwrite an earlier upload with the same name."""
        first = file_storage.save("foto.jpg", b"1")
        second = file_storage.save("foto.jpg", b"2")

        assert first.stored_name != second.stored_name
        assert first.file_type == "application/octet-stream"

    def test_delete(self, file_storage):
        """Should remove a stored file and report missing ones."""
        stored = file_storage.save("a.txt", b"x")

        assert file_storage.delete(stored.stored_name) is True
        assert file_storage.delete(stored.stored_name) is False

    @pytest.mark.parametrize("name", ["", ".", "..", "../secret", "a/b", "a\\b"])
    def test_rejects_traversal(self, file_storage, name):
        """Should refuse names that leave the storage root."""
        with pytest.raises(InvalidStoredNameError):
            file_storage.open_path(name)

    def test_locator_parsing(self):
        """Should extract stored names only from /files/ locators."""
        assert stored_name_from_locator("/files/a-1-ff.jpg") == "a-1-ff.jpg"
        assert stored_name_from_locator("data:image/png;base64,AAAA") is None
        assert stored_name_from_locator("") is None
