"""Unit tests for text buffers and project file access."""

import pytest

from envdesk.core.document import FileDocument, MemoryDocument, ProjectFiles, open_document
from envdesk.utils.errors import DocumentError


class TestMemoryDocument:
    """Tests for the in-memory buffer."""

    def test_range_operations(self):
        """Test insert, delete and replace by offset."""
        doc = MemoryDocument("hello world")
        doc.insert_at(5, ",")
        assert doc.get_text() == "hello, world"
        doc.delete_range(0, 7)
        assert doc.get_text() == "world"
        doc.replace_range(0, 1, "W")
        assert doc.get_text() == "World"

    def test_bad_range(self):
        """Test that out-of-range edits raise."""
        doc = MemoryDocument("abc")
        with pytest.raises(DocumentError):
            doc.replace_range(2, 10, "x")
        with pytest.raises(DocumentError):
            doc.delete_range(2, 1)
        assert doc.get_text() == "abc"

    def test_commit_counter(self):
        """Test commit counting."""
        doc = MemoryDocument()
        doc.commit()
        assert doc.commits == 1
        assert doc.name == "<memory>"


class TestFileDocument:
    """Tests for the file-backed buffer."""

    def test_edit_not_persisted_until_commit(self, tmp_path):
        """Test that edits stay in memory until commit."""
        path = tmp_path / ".env"
        path.write_text("A=1\n")
        doc = open_document(path)
        doc.set_text("A=2\n")
        assert path.read_text() == "A=1\n"

        doc.commit()
        assert path.read_text() == "A=2\n"
        assert [p.name for p in tmp_path.iterdir()] == [".env"]

    def test_preserves_crlf(self, tmp_path):
        """Test that line endings are not translated."""
        path = tmp_path / ".env"
        path.write_bytes(b"A=1\r\n")
        doc = FileDocument(path)
        assert doc.get_text() == "A=1\r\n"
        doc.commit()
        assert path.read_bytes() == b"A=1\r\n"

    def test_missing_file(self, tmp_path):
        """Test reading a file that does not exist."""
        with pytest.raises(DocumentError) as exc_info:
            FileDocument(tmp_path / "missing")
        assert exc_info.value.code == "DOCUMENT_ERROR"

    def test_create(self, tmp_path):
        """Test opening a new file for creation."""
        doc = FileDocument(tmp_path / ".env", create=True)
        assert doc.get_text() == ""
        doc.set_text("A=1\n")
        doc.commit()
        assert (tmp_path / ".env").read_text() == "A=1\n"

    def test_reload(self, tmp_path):
        """Test picking up an external change."""
        path = tmp_path / ".env"
        path.write_text("A=1\n")
        doc = FileDocument(path)
        path.write_text("A=2\n")
        doc.reload()
        assert doc.get_text() == "A=2\n"


class TestProjectFiles:
    """Tests for ProjectFiles."""

    def test_existence_and_listing(self, tmp_path):
        """Test resolving and listing files."""
        (tmp_path / ".env").write_text("")
        (tmp_path / "sub").mkdir()
        files = ProjectFiles(tmp_path)

        assert files.exists(".env")
        assert not files.exists("sub")
        assert files.resolve(".env.local") is None
        assert files.resolve(".env") == tmp_path.resolve() / ".env"
        assert files.list_names() == [".env"]
