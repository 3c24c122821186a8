"""Remote template download and rendering.

Fetches a GitHub branch archive, extracts it into a scratch directory,
locates a template sub-tree inside it and renders that tree into the output
directory.  One fetch runs these stages in order and stops at the first
failure:

1. create a unique scratch directory
2. download ``{repo_url}/archive/refs/heads/{branch}.zip``
3. extract the archive entry by entry
4. locate ``{repo}-{branch}/{sub_path}`` and render it
5. delete the scratch directory (always)

Typical usage::

    fetcher = RemoteTemplateFetcher(timeout=30)
    result = await fetcher.fetch(
        "https://github.com/user/repo", "main", "bricks/core", out_dir, {"name": "core"}
    )
    if not result.success:
        print(result.error)
"""

from __future__ import annotations

import asyncio
import shutil
import tempfile
import zipfile
import zlib
from collections.abc import Mapping
from pathlib import Path

import httpx

from .emitter import FileEmitter
from .errors import ArchiveCorrupt, FetchError, NetworkFailure, TemplatePathNotFound
from .results import FetchResult
from .templates import TemplateRenderer

_SCRATCH_PREFIX = "flutter_scaffold_"
_CHUNK_SIZE = 64 * 1024


class RemoteTemplateFetcher:
    """Downloads a branch archive and renders a template tree from it.

    The HTTP client is created per fetch.  ``transport`` is handed to
    ``httpx.AsyncClient`` unchanged, which lets tests plug in an
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        timeout: float = 60,
        connect_timeout: float = 10.0,
        scratch_root: str | Path | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self.scratch_root = Path(scratch_root) if scratch_root is not None else None
        self.transport = transport

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient``; GitHub redirects archive URLs to codeload."""
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=self.connect_timeout),
            follow_redirects=True,
            transport=self.transport,
        )

    @staticmethod
    def archive_url(repo_url: str, branch: str) -> str:
        return f"{repo_url.rstrip('/')}/archive/refs/heads/{branch}.zip"

    @staticmethod
    def archive_root_name(repo_url: str, branch: str) -> str:
        """Name of the top-level directory GitHub puts inside a branch archive.

        ``https://github.com/user/my_repo`` on ``main`` gives ``my_repo-main``;
        slashes in the branch name become hyphens.
        """
        repo_name = repo_url.rstrip("/").rsplit("/", 1)[-1]
        if repo_name.endswith(".git"):
            repo_name = repo_name[: -len(".git")]
        return f"{repo_name}-{branch.replace('/', '-')}"

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    async def download(self, url: str, destination: Path) -> Path:
        """Stream *url* into *destination*.

        Raises:
            NetworkFailure: On connection errors, timeouts, invalid URLs and
                non-2xx responses.
        """
        try:
            async with self._client() as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()
                    fh = await asyncio.to_thread(destination.open, "wb")
                    try:
                        async for chunk in response.aiter_bytes(_CHUNK_SIZE):
                            await asyncio.to_thread(fh.write, chunk)
                    finally:
                        await asyncio.to_thread(fh.close)
        except httpx.HTTPStatusError as exc:
            raise NetworkFailure(
                f"HTTP {exc.response.status_code} while downloading {url}"
            ) from exc
        except httpx.TimeoutException as exc:
            raise NetworkFailure(f"Download of {url} timed out after {self.timeout}s") from exc
        except httpx.ConnectError as exc:
            raise NetworkFailure(f"Cannot connect to {url}: {exc}") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NetworkFailure(f"Download of {url} failed: {exc}") from exc
        return destination

    @staticmethod
    def extract(archive: Path, target_dir: Path) -> Path:
        """Extract *archive* entry by entry into *target_dir*.

        Directory entries become directories, file entries are streamed to
        disk.  Entries that would land outside *target_dir* are rejected.

        Raises:
            ArchiveCorrupt: If the archive cannot be read, or an entry is
                encrypted or uses an unsupported compression method.
        """
        target_dir.mkdir(parents=True, exist_ok=True)
        root = target_dir.resolve()
        try:
            with zipfile.ZipFile(archive) as zf:
                for entry in zf.infolist():
                    destination = (root / entry.filename).resolve()
                    if destination != root and root not in destination.parents:
                        raise ArchiveCorrupt(f"Archive entry escapes extraction directory: {entry.filename}")
                    if entry.is_dir():
                        destination.mkdir(parents=True, exist_ok=True)
                        continue
                    destination.parent.mkdir(parents=True, exist_ok=True)
                    with zf.open(entry) as src, destination.open("wb") as dst:
                        shutil.copyfileobj(src, dst, _CHUNK_SIZE)
        except (zipfile.BadZipFile, zlib.error, EOFError, RuntimeError, NotImplementedError, ValueError) as exc:
            raise ArchiveCorrupt(f"Downloaded archive is corrupt: {exc}") from exc
        return target_dir

    def locate(self, extract_dir: Path, repo_url: str, branch: str, sub_path: str) -> Path:
        """Return the template directory inside the extracted archive.

        Raises:
            TemplatePathNotFound: If the directory does not exist.
        """
        root_name = self.archive_root_name(repo_url, branch)
        template_root = extract_dir / root_name / sub_path.strip("/")
        if not template_root.is_dir():
            raise TemplatePathNotFound(
                f"Template path '{sub_path}' not found in {root_name}"
            )
        return template_root

    def _extract_and_render(
        self,
        archive: Path,
        extract_dir: Path,
        repo_url: str,
        branch: str,
        sub_path: str,
        output_dir: Path,
        context: Mapping[str, str],
        emitter: FileEmitter,
    ) -> list[Path]:
        self.extract(archive, extract_dir)
        template_root = self.locate(extract_dir, repo_url, branch, sub_path)
        return self.renderer.render_tree(template_root, output_dir, context, emitter)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def fetch(
        self,
        repo_url: str,
        branch: str,
        sub_path: str,
        output_dir: str | Path,
        context: Mapping[str, str],
        emitter: FileEmitter | None = None,
    ) -> FetchResult:
        """Download, extract and render a remote template tree.

        Never raises for pipeline failures: the returned
        :class:`FetchResult` carries a single error message instead.  The
        scratch directory is removed on every path.

        A file the emitter could not write fails the whole fetch; the files
        that were written are still listed in ``written``.
        """
        url = self.archive_url(repo_url, branch)
        emitter = emitter or FileEmitter(extension="")
        failures_before = len(emitter.failures)
        scratch: Path | None = None

        try:
            if self.scratch_root is not None:
                self.scratch_root.mkdir(parents=True, exist_ok=True)
            scratch = Path(tempfile.mkdtemp(prefix=_SCRATCH_PREFIX, dir=self.scratch_root))
            archive = await self.download(url, scratch / "repo.zip")
            written = await asyncio.to_thread(
                self._extract_and_render,
                archive,
                scratch / "extracted",
                repo_url,
                branch,
                sub_path,
                Path(output_dir),
                context,
                emitter,
            )
        except FetchError as exc:
            return FetchResult(success=False, url=url, error=f"Failed to generate template: {exc}")
        except OSError as exc:
            return FetchResult(
                success=False,
                url=url,
                error=f"Failed to generate template: {exc.strerror or exc}",
            )
        finally:
            if scratch is not None:
                await asyncio.to_thread(shutil.rmtree, scratch, True)

        failures = emitter.failures[failures_before:]
        if failures:
            return FetchResult(
                success=False,
                url=url,
                written=written,
                error=(
                    f"Failed to generate template: {len(failures)} of "
                    f"{len(failures) + len(written)} files could not be written ({failures[0]})"
                ),
            )
        return FetchResult(success=True, url=url, written=written)
