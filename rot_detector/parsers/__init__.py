"""Manifest parsers for supported ecosystems."""

from pathlib import Path

from rot_detector.consts import MANIFEST_LOOKUP_ORDER, NPM_MANIFEST, PYPI_MANIFEST
from rot_detector.exceptions import ManifestNotFoundError, UnsupportedManifestError
from rot_detector.models.model_dependency import Dependency, Ecosystem
from rot_detector.parsers.package_json import parse_package_json
from rot_detector.parsers.requirements_txt import parse_requirements_txt


def detect_file_type(file_path: Path | str) -> Ecosystem | None:
    """Detect the ecosystem of a manifest from its file name."""
    basename = Path(file_path).name.lower()

    if basename == NPM_MANIFEST:
        return Ecosystem.NPM
    if basename == PYPI_MANIFEST or basename.endswith(".txt"):
        return Ecosystem.PYPI
    return None


def resolve_manifest_path(path: Path | str) -> Path:
    """Resolve a file or project directory to a manifest file.

    A directory resolves to its package.json, else its requirements.txt.

    Raises:
        ManifestNotFoundError: If nothing usable exists at the path.
    """
    resolved = Path(path).resolve()

    if resolved.is_dir():
        for name in MANIFEST_LOOKUP_ORDER:
            candidate = resolved / name
            if candidate.is_file():
                return candidate
        raise ManifestNotFoundError(
            str(resolved), message="No package.json or requirements.txt found in directory"
        )

    if not resolved.is_file():
        raise ManifestNotFoundError(str(resolved))

    return resolved


def parse_dependency_file(file_path: Path | str) -> list[Dependency]:
    """Parse a manifest file, dispatching on its detected type.

    Raises:
        UnsupportedManifestError: If the file type is not recognized.
    """
    ecosystem = detect_file_type(file_path)

    if ecosystem == Ecosystem.NPM:
        return parse_package_json(file_path)
    if ecosystem == Ecosystem.PYPI:
        return parse_requirements_txt(file_path)
    raise UnsupportedManifestError(f"Unsupported file type: {Path(file_path).name}")


__all__ = [
    "detect_file_type",
    "parse_dependency_file",
    "parse_package_json",
    "parse_requirements_txt",
    "resolve_manifest_path",
]
