"""Shared test fixtures for specout.

Provides isolated config directories, output state management, a CLI
runner, throwaway FastAPI application packages written into ``tmp_path``,
and a mock HTTP layer for the url source.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

from specout.output import OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager keeps a reference to the sys.stderr object that was
    current when it was created. CliRunner swaps those streams during a
    test, so a manager surviving into the next test would write to a
    closed file.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, colourless output manager."""
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points the XDG directories at ``tmp_path``, clears all ``SPECOUT_*``
    environment variables and changes the working directory to
    ``tmp_path``.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("specout.config.platform.system", lambda: "Linux")
    monkeypatch.setenv("NO_COLOR", "1")
    for var in ["SPECOUT_FORMAT", "SPECOUT_LEVEL", "SPECOUT_TIMEOUT"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


# ---------------------------------------------------------------------------
# Application packages
# ---------------------------------------------------------------------------


SIMPLE_APP = '''\
from fastapi import FastAPI

app = FastAPI()
app.openapi_version = "3.0.0"


@app.get("/cats", tags=["cats"])
def list_cats() -> list[str]:
    return ["tom"]
'''

SIMPLE_MANIFEST = '''\
[project]
name = "simple-api"
description = "A simple cat API"
version = "1.2.3"
'''


@pytest.fixture
def make_package(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing an application package into ``tmp_path``.

    Args (of the returned callable):
        name: Directory name of the package.
        source: Contents of ``app/main.py``.
        manifest: Contents of ``pyproject.toml``; ``None`` writes none.

    Returns:
        The package directory.
    """

    def _make(
        name: str = "simple-api",
        source: str = SIMPLE_APP,
        manifest: Optional[str] = SIMPLE_MANIFEST,
    ) -> Path:
        package_dir = tmp_path / name
        app_dir = package_dir / "app"
        app_dir.mkdir(parents=True)
        (app_dir / "__init__.py").write_text("")
        (app_dir / "main.py").write_text(textwrap.dedent(source))
        if manifest is not None:
            (package_dir / "pyproject.toml").write_text(manifest)
        return package_dir

    return _make


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_http(monkeypatch: pytest.MonkeyPatch) -> Callable[[Callable[[httpx.Request], Any]], None]:
    """Route every ``httpx.AsyncClient`` built by the url source through a handler.

    Call the returned function with a handler taking an
    :class:`httpx.Request` and returning an :class:`httpx.Response` (or
    raising an ``httpx`` exception).
    """
    real_client = httpx.AsyncClient

    def _install(handler: Callable[[httpx.Request], Any]) -> None:
        transport = httpx.MockTransport(handler)

        def _client(*args: Any, **kwargs: Any) -> httpx.AsyncClient:
            kwargs["transport"] = transport
            return real_client(*args, **kwargs)

        monkeypatch.setattr("specout.sources.url.httpx.AsyncClient", _client)

    return _install
