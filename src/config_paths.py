"""Helpers to resolve the footprint configuration file and its output locations."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

REPO_ROOT = Path(__file__).resolve().parents[1]

CONFIG_ENV_VAR = "FOOTPRINT_CONFIG_PATH"


def get_config_path(default: Path | None = None) -> Path:
    """Return the configuration path, honouring FOOTPRINT_CONFIG_PATH when set."""

    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    if default is not None:
        return default.resolve()
    return (REPO_ROOT / "config.yaml").resolve()


def sanitize_run_directory(value: str | None) -> str | None:
    """Return a safe run-directory component (no absolutes, no parent traversals)."""

    if value is None:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    path = Path(candidate)
    if path.is_absolute():
        raise ValueError("results.run_directory must be a relative path.")
    parts = [part for part in path.parts if part not in ("", ".", "..")]
    if not parts:
        return None
    return "/".join(parts)


def get_results_run_directory(config: Mapping[str, object] | None) -> str | None:
    """Extract ``results.run_directory`` from the root configuration mapping."""

    if not isinstance(config, Mapping):
        return None
    results_cfg = config.get("results")
    if not isinstance(results_cfg, Mapping):
        return None
    raw_value = results_cfg.get("run_directory")
    if raw_value is None:
        return None
    return sanitize_run_directory(str(raw_value))


def apply_results_run_directory(
    path: Path, run_directory: str | None, base: Path | None = None
) -> Path:
    """Place ``path`` inside the run directory of the results tree it writes to.

    With ``base`` (the directory holding config.yaml) only a ``results`` folder
    directly below ``base`` counts, so parents of the project that happen to be
    called ``results`` are left alone. Outputs outside ``base`` are unchanged.
    Without ``base`` the deepest ``results`` component of ``path`` is used.
    """

    if not run_directory:
        return path
    if base is not None:
        try:
            relative = path.relative_to(base)
        except ValueError:
            return path
        anchor, parts = base, relative.parts
        if not parts or parts[0] != "results":
            return path
        idx = 0
    else:
        anchor, parts = Path(), path.parts
        if "results" not in parts:
            return path
        idx = len(parts) - 1 - parts[::-1].index("results")

    tail = parts[idx + 1 :]
    run_parts = Path(run_directory).parts
    if tuple(tail[: len(run_parts)]) == run_parts:
        return path
    return anchor.joinpath(*parts[: idx + 1], *run_parts, *tail)
