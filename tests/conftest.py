"""Core test fixtures for the ergobox project."""

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from ergobox.bindings.codec import BindingCodec, create_binding_codec
from ergobox.bindings.registry import KeyRegistry
from ergobox.config.key_registry import load_key_registry
from ergobox.project.models import KeymapProject
from ergobox.project.service import ProjectService, create_project_service


SINGLE_COLUMN_YAML = """\
units:
  u: 19.05
points:
  zones:
    main:
      anchor:
        shift: [0, 0]
      columns:
        inner:
          key:
            spread: 19.05
            column_net: C0
      rows:
        bottom:
          row_net: R0
        home:
          row_net: R1
pcbs:
  main:
    footprints:
      mcu:
        params:
          P0: R0
          P1: R1
          P2: C0
"""

SPLIT_YAML = """\
units:
  u: 19.05
points:
  zones:
    main:
      columns:
        outer:
          key:
            column_net: C0
        inner:
          key:
            column_net: C1
      rows:
        bottom:
          row_net: R0
        home:
          row_net: R1
  mirror:
    ref: main_inner_bottom
    distance: 40
pcbs:
  main:
    footprints:
      mcu:
        params:
          P0: R0
          P1: R1
          P2: C0
          P3: C1
      trrs:
        params:
          A: P9
"""


# ---- Base Fixtures ----


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(scope="session")
def key_registry() -> KeyRegistry:
    """The bundled key registry."""
    return load_key_registry()


@pytest.fixture
def codec(key_registry: KeyRegistry) -> BindingCodec:
    return create_binding_codec(key_registry)


@pytest.fixture
def project_service() -> ProjectService:
    return create_project_service()


@pytest.fixture
def single_column_project(project_service: ProjectService) -> KeymapProject:
    """Project over a one column, two row layout (keys bottom and home)."""
    return project_service.create_project(SINGLE_COLUMN_YAML)


@pytest.fixture
def split_project(project_service: ProjectService) -> KeymapProject:
    """Project over a mirrored 2x2 layout with a TRRS footprint."""
    return project_service.create_project(SPLIT_YAML)


# ---- File Fixtures ----


@pytest.fixture
def single_column_yaml() -> str:
    return SINGLE_COLUMN_YAML


@pytest.fixture
def split_yaml() -> str:
    return SPLIT_YAML


@pytest.fixture
def layout_file(tmp_path: Path) -> Path:
    path = tmp_path / "layout.yaml"
    path.write_text(SINGLE_COLUMN_YAML, encoding="utf-8")
    return path


@pytest.fixture
def split_layout_file(tmp_path: Path) -> Path:
    path = tmp_path / "split.yaml"
    path.write_text(SPLIT_YAML, encoding="utf-8")
    return path


# ---- Test Isolation Fixtures ----


@pytest.fixture
def isolated_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Run with an empty working directory, XDG home and no ERGOBOX_* variables.

    Usage:
        def test_something(isolated_env):
            (isolated_env / "ergobox.yaml").write_text("keyboard_name: kb")
    """
    workdir = tmp_path / "work"
    xdg_home = tmp_path / "xdg"
    workdir.mkdir()
    xdg_home.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_home))
    for name in [name for name in os.environ if name.startswith("ERGOBOX_")]:
        monkeypatch.delenv(name, raising=False)
    yield workdir


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop handlers installed by CLI invocations so they do not leak."""
    yield
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.WARNING)
