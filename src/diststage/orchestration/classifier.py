"""
diststage.orchestration.classifier - Artifact Classification
==============================================================

Decides which bucket each file of the build-output directory goes to.
The decision depends on the file NAME only, by substring, first match wins:

    1. contains "src"                                   → SOURCE
    2. contains "bin"                                   → BINARY
    3. contains "scm", "sha1.properties" or
       "sha256.properties"                              → METADATA_EXCLUDED
    4. anything else                                    → ROOT

    foo-1.0-src.tar.gz      → SOURCE
    foo-1.0-bin.zip         → BINARY
    sha256.properties       → METADATA_EXCLUDED
    RELEASE-NOTES.txt       → ROOT
    site.zip                → ROOT

Substring matching is permissive on purpose so naming variants across
sub-projects still land in the right place. The flip side is that a root
file whose name happens to contain "src" or "bin" is treated as a source
or binary artifact; that is accepted, not special-cased.

Directories are never classified: classify_directory() lists regular
files only.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from diststage.core.enums import ArtifactKind
from diststage.core.exceptions import IOFailure
from diststage.core.models import ArtifactFile


logger = structlog.get_logger(component="artifact_classifier")


SOURCE_MARKER = "src"
BINARY_MARKER = "bin"
EXCLUDED_MARKERS: tuple[str, ...] = ("scm", "sha1.properties", "sha256.properties")


def classify_name(name: str) -> ArtifactKind:
    """Classify a file name. Pure function of ``name``."""
    if SOURCE_MARKER in name:
        return ArtifactKind.SOURCE
    if BINARY_MARKER in name:
        return ArtifactKind.BINARY
    if any(marker in name for marker in EXCLUDED_MARKERS):
        return ArtifactKind.METADATA_EXCLUDED
    return ArtifactKind.ROOT


def classify_file(path: Path) -> ArtifactFile:
    """Classify a single file by its name."""
    path = Path(path)
    return ArtifactFile(path=path, kind=classify_name(path.name))


def classify_files(paths: list[Path]) -> list[ArtifactFile]:
    """Classify ``paths`` in the given order.

    The caller must have excluded directories already.
    """
    return [classify_file(path) for path in paths]


def list_build_output(build_output_dir: Path) -> list[Path]:
    """Regular files at the top level of ``build_output_dir``, by name."""
    build_output_dir = Path(build_output_dir)
    try:
        entries = [entry for entry in build_output_dir.iterdir() if entry.is_file()]
    except OSError as e:
        raise IOFailure(
            f"Unable to list build output directory {build_output_dir}: {e}",
            paths=[build_output_dir],
            error_code="LIST_FAILED",
        ) from e
    return sorted(entries, key=lambda entry: entry.name)


def classify_directory(build_output_dir: Path) -> list[ArtifactFile]:
    """List and classify the top-level files of ``build_output_dir``."""
    artifacts = classify_files(list_build_output(build_output_dir))
    logger.debug(
        "build_output_classified",
        build_output_dir=str(build_output_dir),
        counts={
            kind.value: sum(1 for a in artifacts if a.kind == kind)
            for kind in ArtifactKind
        },
    )
    return artifacts
