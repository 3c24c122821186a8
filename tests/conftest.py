"""Shared pytest fixtures for the Flutter Scaffold test suite.

Provides reusable fixtures for:
- Temporary target directories and a minimal Flutter project
- In-memory zip archives shaped like GitHub branch archives
- ``httpx.MockTransport`` factories serving those archives
"""

from __future__ import annotations

import io
import zipfile
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from flutter_scaffold.config import Config


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """Empty directory features are generated into."""
    directory = tmp_path / "target"
    directory.mkdir()
    return directory


@pytest.fixture
def flutter_project(tmp_path: Path) -> Path:
    """Minimal Flutter project with a pubspec.yaml and ``lib/features``."""
    project = tmp_path / "shop_app"
    (project / "lib" / "features").mkdir(parents=True)
    (project / "pubspec.yaml").write_text(
        "name: shop_app\n"
        "description: A sample shop.\n"
        "version: 1.0.0+1\n"
        "\n"
        "dependencies:\n"
        "  flutter:\n"
        "    sdk: flutter\n",
        encoding="utf-8",
    )
    return project


@pytest.fixture
def config(target_dir: Path) -> Config:
    """Config pointing at the empty target directory with a fixed package name."""
    return Config(target_dir=target_dir, package_name="shop_app")


# ---------------------------------------------------------------------------
# Archives
# ---------------------------------------------------------------------------

def build_archive(files: dict[str, str | bytes], directories: list[str] | None = None) -> bytes:
    """Return the bytes of a zip archive holding *files* and *directories*."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for directory in directories or []:
            zf.writestr(zipfile.ZipInfo(directory.rstrip("/") + "/"), b"")
        for name, content in files.items():
            zf.writestr(name, content)
    return buffer.getvalue()


@pytest.fixture
def make_archive() -> Callable[..., bytes]:
    """The :func:`build_archive` helper, as a fixture."""
    return build_archive


@pytest.fixture
def brick_archive() -> bytes:
    """Branch archive of ``https://github.com/acme/bricks`` on ``main``."""
    return build_archive(
        {
            "bricks-main/README.md": "# Bricks\n",
            "bricks-main/bricks/core/__brick__/{{name}}_config.dart": (
                "// {{package_name}}\nclass {{pascal_name}}Config {}\n"
            ),
            "bricks-main/bricks/core/__brick__/network/api_client.dart": (
                "class ApiClient {\n  // {{missing}}done\n}\n"
            ),
            "bricks-main/bricks/core/__brick__/assets/logo.bin": b"\xff\xfe\x00{{name}}",
        },
        directories=["bricks-main", "bricks-main/bricks", "bricks-main/bricks/core/__brick__/empty"],
    )


@pytest.fixture
def archive_transport() -> Callable[..., httpx.MockTransport]:
    """Factory for a transport answering every request with the given body.

    The transport records requested URLs in ``transport.requests``.
    """

    def _factory(body: bytes = b"", status_code: int = 200) -> httpx.MockTransport:
        requests: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(str(request.url))
            return httpx.Response(status_code, content=body)

        transport = httpx.MockTransport(handler)
        transport.requests = requests  # type: ignore[attr-defined]
        return transport

    return _factory
