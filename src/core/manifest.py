# src/core/manifest.py - v1
"""Artifact provenance ledger.

The manifest maps an artifact name to the pass that produced it, when,
the content fingerprint, and its path relative to .process/. It is loaded
at the start of a pass run, mutated, and saved at the end. A missing file
is an empty manifest.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from procflow.core.fingerprint import content_hash
from procflow.core.layout import manifest_path

logger = logging.getLogger(__name__)

MANIFEST_VERSION = 1


class ArtifactRecord(BaseModel):
    """Provenance of one artifact."""

    produced_by: str
    last_updated: str
    content_hash: str
    path: str


class Manifest(BaseModel):
    """Versioned map of artifact name -> ArtifactRecord."""

    version: int = MANIFEST_VERSION
    artifacts: dict[str, ArtifactRecord] = Field(default_factory=dict)

    def record_artifact(
        self,
        artifact_name: str,
        pass_name: str,
        file_path: str,
        content: str,
    ) -> ArtifactRecord:
        """Record that a pass produced an artifact, replacing any prior record."""
        record = ArtifactRecord(
            produced_by=pass_name,
            last_updated=datetime.now(timezone.utc).isoformat(),
            content_hash=content_hash(content),
            path=file_path,
        )
        self.artifacts[artifact_name] = record
        return record

    def get(self, artifact_name: str) -> ArtifactRecord | None:
        return self.artifacts.get(artifact_name)

    def is_fresh(self, artifact_name: str, dependency_names: list[str] | None = None) -> bool:
        """Return True when the artifact has a record.

        dependency_names is accepted but not compared: freshness is currently
        existence only.
        """
        return artifact_name in self.artifacts

    def produced_by(self, pass_name: str) -> list[str]:
        """Artifact names last produced by a pass, sorted."""
        return sorted(
            name for name, record in self.artifacts.items() if record.produced_by == pass_name
        )


def load_manifest(project_root: Path) -> Manifest:
    """Load the manifest, or an empty one if the file does not exist."""
    path = manifest_path(project_root)
    if not path.exists():
        return Manifest()
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    manifest = Manifest.model_validate(data)
    logger.debug("Loaded manifest with %d artifacts from %s", len(manifest.artifacts), path)
    return manifest


def save_manifest(project_root: Path, manifest: Manifest) -> Path:
    """Write the manifest. No locking: concurrent writers race."""
    path = manifest_path(project_root)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump(manifest.model_dump(mode="json"), sort_keys=False, allow_unicode=True),
        encoding="utf-8",
    )
    return path
