"""Parser for npm package.json manifests."""

import json
import logging
import re
from pathlib import Path

from rot_detector.exceptions import ManifestNotFoundError, ManifestParseError
from rot_detector.models.model_dependency import Dependency, DependencyType, Ecosystem

logger = logging.getLogger(__name__)

_RANGE_PREFIX = re.compile(r"^[\^~>=<]+")


def clean_version(version: str) -> str:
    """Strip semver range prefixes (^, ~, >=, >, <, <=, =)."""
    return _RANGE_PREFIX.sub("", version).strip()


def _section(data: dict, key: str, path: Path) -> dict[str, str]:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ManifestParseError(f"'{key}' in {path} must be an object")
    return section


def parse_package_json(file_path: Path | str) -> list[Dependency]:
    """Parse a package.json file and extract direct dependencies.

    Regular dependencies come first, followed by devDependencies.

    Args:
        file_path: Path to package.json.

    Returns:
        Dependencies in declaration order.

    Raises:
        ManifestNotFoundError: If the file does not exist.
        ManifestParseError: If the file is not valid UTF-8 JSON.
    """
    path = Path(file_path).resolve()
    if not path.is_file():
        raise ManifestNotFoundError(str(path))

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise ManifestParseError(f"Cannot read {file_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Invalid JSON in {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestParseError(f"Invalid package.json in {file_path}: expected an object")

    dependencies: list[Dependency] = []
    for key, is_dev in (("dependencies", False), ("devDependencies", True)):
        for name, version in _section(data, key, path).items():
            dependencies.append(
                Dependency(
                    name=name,
                    version=clean_version(str(version)),
                    type=DependencyType.DIRECT,
                    ecosystem=Ecosystem.NPM,
                    is_dev=is_dev,
                )
            )

    logger.debug(f"Parsed {len(dependencies)} dependencies from {path}")
    return dependencies
