"""
Pytest configuration and fixtures
"""
from pathlib import Path
import sys

import pytest


# Define paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
BACKEND_ROOT = PROJECT_ROOT / "backend"

# Make the filehost package importable without an editable install
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from filehost.config import Settings  # noqa: E402
from filehost.state import ServerContext  # noqa: E402


def _write(path: Path, content: bytes = b"\x00binary") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


@pytest.fixture
def write_file():
    """Helper to create a file (and its parents) inside a test tree"""
    return _write


@pytest.fixture
def release_tree(tmp_path: Path) -> Path:
    """A content root with one release, metadata files and ignored folders"""
    root = tmp_path / "releases"
    _write(root / "1.1.0" / "App-1.1.0.msi", b"MZ" + b"\x00" * 2048)
    _write(root / "1.1.0" / "App-1.1.0.zip.sig", b"signature")
    _write(root / "1.2.0" / "linux" / "app_1.2.0_amd64.deb")
    _write(root / "node_modules" / "ignored.msi")
    _write(root / ".git" / "objects" / "pack.zip")
    _write(root / "README.md", b"# readme\n")
    _write(root / ".env", b"PORT=9999\n")
    return root


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    public = tmp_path / "assets"
    public.mkdir()
    (public / "index.html").write_text("<html><body>Downloads</body></html>")
    (public / "style.css").write_text("body { color: black; }")
    return public


@pytest.fixture
def settings(release_tree: Path, public_dir: Path) -> Settings:
    return Settings(
        port=8080,
        host="127.0.0.1",
        use_tunnel=False,
        content_root=release_tree,
        public_dir=public_dir,
    )


@pytest.fixture
def context(settings: Settings) -> ServerContext:
    return ServerContext(settings=settings)
