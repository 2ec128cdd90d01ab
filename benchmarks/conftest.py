from __future__ import annotations

import importlib.metadata as importlib_metadata
import json
import os
import platform
import sys
from pathlib import Path

import pytest
from jinja2 import Environment as Jinja2Environment
from jinja2 import FileSystemLoader as Jinja2FileSystemLoader

from themed import Theme, ThemeConfiguration
from themed.environment.config import bundled_theme_path

BASE_DIR = Path(__file__).resolve().parent
BENCHMARK_OUTPUT_DIR = BASE_DIR.parent / ".benchmarks"
BENCHMARK_OUTPUT_DIR.mkdir(exist_ok=True)


def _version(dist: str) -> str:
    try:
        return importlib_metadata.version(dist)
    except importlib_metadata.PackageNotFoundError:
        return "unknown"


def collect_environment_metadata() -> dict[str, object]:
    """Capture reproducibility metadata for each benchmark run."""
    return {
        "python": {
            "version": platform.python_version(),
            "implementation": platform.python_implementation(),
            "executable": sys.executable,
        },
        "os": {
            "system": platform.system(),
            "release": platform.release(),
            "machine": platform.machine(),
        },
        "cpu": {
            "processor": platform.processor(),
            "count": os.cpu_count(),
        },
        "themed": _version("themed"),
        "jinja2": _version("jinja2"),
    }


@pytest.fixture(scope="session")
def environment_metadata() -> dict[str, object]:
    """Write environment metadata to .benchmarks for ingestion."""
    metadata = collect_environment_metadata()
    (BENCHMARK_OUTPUT_DIR / "environment.json").write_text(json.dumps(metadata, indent=2))
    return metadata


@pytest.fixture(scope="session")
def theme(tmp_path_factory: pytest.TempPathFactory) -> Theme:
    log_dir = tmp_path_factory.mktemp("themed-log")
    return Theme(ThemeConfiguration(debug_log=log_dir / "themed.log"))


@pytest.fixture(scope="session")
def jinja2_env() -> Jinja2Environment:
    # Same templates and loader search order as the theme, without Themed on top.
    root = bundled_theme_path()
    loader = Jinja2FileSystemLoader([str(root), str(root / "components")])
    env = Jinja2Environment(loader=loader, autoescape=False, auto_reload=False)
    env.globals["component"] = lambda name, content=None: ""
    return env


@pytest.fixture(scope="session")
def button_content() -> dict[str, object]:
    return {
        "id": "save",
        "text": "Save changes",
        "variant": "primary",
        "size": "lg",
        "classes": "w-100",
        "attributes": {"data-action": "save", "data-target": "#profile"},
    }
