import pytest


@pytest.fixture
def write_text(tmp_path):
    """Writes `lines` to tmp_path/name and returns the path."""
    def _write(name, lines):
        p = tmp_path / name
        p.write_text("\n".join(lines) + "\n")
        return p
    return _write
