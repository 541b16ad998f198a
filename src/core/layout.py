# src/core/layout.py - v1
"""Project directory structure definition.

Everything the engine persists lives under {project_root}/.process/.
"""

from __future__ import annotations

from pathlib import Path

PROCESS_DIR = ".process"

STATE_FILE = ".state.yaml"
MANIFEST_FILE = "manifest.yaml"
CONFIG_FILE = "config.yaml"

BRANCHES_DIR = "branches"
PROMPTS_DIR = "prompts"

GLOBAL_CONFIG_PATH = Path("~/.config/procflow/config.yaml")


def process_dir(project_root: Path) -> Path:
    """Return the .process/ directory of a project."""
    return Path(project_root) / PROCESS_DIR


def is_initialized(project_root: Path) -> bool:
    return process_dir(project_root).is_dir()


def state_path(project_root: Path) -> Path:
    return process_dir(project_root) / STATE_FILE


def manifest_path(project_root: Path) -> Path:
    return process_dir(project_root) / MANIFEST_FILE


def config_path(project_root: Path) -> Path:
    return process_dir(project_root) / CONFIG_FILE


def branch_dir(project_root: Path, branch: str) -> Path:
    return process_dir(project_root) / BRANCHES_DIR / branch


def branch_config_path(project_root: Path, branch: str) -> Path:
    """Per-branch configuration fragment merged over the global config."""
    return branch_dir(project_root, branch) / CONFIG_FILE


def prompts_dir(project_root: Path) -> Path:
    return process_dir(project_root) / PROMPTS_DIR


def artifact_path(project_root: Path, relative_path: str) -> Path:
    """Resolve an artifact's relative path against the .process/ directory."""
    return process_dir(project_root) / relative_path
