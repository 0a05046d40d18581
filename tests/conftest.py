import pytest

from ffbuild import build_archive


@pytest.fixture
def write_archive(tmp_path):
    """Write a synthetic archive to a temporary .ff file and return its path."""

    def _write(*args, **kwargs):
        path = tmp_path / "test.ff"
        path.write_bytes(build_archive(*args, **kwargs))
        return path

    return _write
