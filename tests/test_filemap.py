import pytest

from wellformed.filemap import XML_MAX_CHUNK_LEN, FileTooLargeError, map_file


def test_reads_whole_file(tmp_path):
    content = b"<?xml version='1.0'?>\n<doc>\xc3\xa9</doc>\n"
    path = tmp_path / "doc.xml"
    path.write_bytes(content)
    assert map_file(str(path)) == content


def test_accepts_path_objects(tmp_path):
    path = tmp_path / "a.xml"
    path.write_bytes(b"<a/>")
    assert map_file(path) == b"<a/>"


def test_empty_file_gives_empty_bytes(tmp_path):
    path = tmp_path / "empty.xml"
    path.write_bytes(b"")
    assert map_file(path) == b""


def test_binary_content_is_unchanged(tmp_path):
    content = bytes(range(256)) * 3 + b"\r\n\r\n"
    path = tmp_path / "bin"
    path.write_bytes(content)
    result = map_file(path)
    assert result == content
    assert len(result) == len(content)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        map_file(tmp_path / "missing.xml")


def test_directory_is_rejected(tmp_path):
    with pytest.raises(OSError):
        map_file(tmp_path)