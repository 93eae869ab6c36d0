"""Path sandboxing for the MCP surface."""

from __future__ import annotations

import os
from pathlib import Path

ALLOWED_FILE_SUFFIXES = {".ltsv", ".log", ".tsv", ".txt"}
BASE_DIR_ENV = "LTSV_BASE_DIR"


def base_dir() -> Path:
    """Return the resolved base directory for file access."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def safe_resolve(path: str) -> Path:
    """Resolve a path under the configured base directory."""
    base = base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p


def allowed_suffix(path: Path) -> str:
    """Return the effective suffix for allowlist checks (looking through .gz)."""
    suffix = path.suffix.lower()
    if suffix == ".gz":
        suffix = path.with_suffix("").suffix.lower()
    return suffix


def ensure_allowed_suffix(path: Path) -> None:
    if allowed_suffix(path) not in ALLOWED_FILE_SUFFIXES:
        allowed = ", ".join(sorted(ALLOWED_FILE_SUFFIXES))
        raise ValueError(f"File type not allowed. Allowed: {allowed} (optionally .gz).")


def resolve_input_path(path: str) -> Path:
    """Resolve and validate an existing file to read."""
    resolved = safe_resolve(path)
    if not resolved.is_file():
        raise FileNotFoundError(f"File not found: {resolved}")
    ensure_allowed_suffix(resolved)
    return resolved


def resolve_output_path(path: str) -> Path:
    """Resolve and validate a file to write; its directory must already exist."""
    resolved = safe_resolve(path)
    ensure_allowed_suffix(resolved)
    if not resolved.parent.is_dir():
        raise FileNotFoundError(f"Directory not found: {resolved.parent}")
    return resolved
