"""Parser for pip requirements files."""

import logging
import re
from pathlib import Path

from rot_detector.exceptions import ManifestNotFoundError, ManifestParseError
from rot_detector.models.model_dependency import Dependency, DependencyType, Ecosystem

logger = logging.getLogger(__name__)

# package_name[extras]<version specifiers>
_REQUIREMENT = re.compile(r"^([A-Za-z0-9][A-Za-z0-9_.-]*)(?:\[[^\]]+\])?\s*(.*)$")
_VERSION_SPEC = re.compile(r"[=~<>!]+\s*([0-9][0-9A-Za-z.*+-]*)")


def parse_requirement_line(line: str) -> tuple[str, str] | None:
    """Parse a single requirement line into (name, version).

    Handles formats like:
    - package
    - package==1.0.0
    - package>=1.0.0,<2.0.0
    - package[extra]==1.0.0
    - package~=1.0.0 ; python_version >= "3.8"

    Returns:
        (name, version) with version "*" when unpinned, or None if the line
        holds no requirement.
    """
    line = line.split("#", 1)[0].split(";", 1)[0].strip()
    if not line:
        return None

    match = _REQUIREMENT.match(line)
    if not match:
        return None

    name, specifiers = match.group(1), match.group(2)
    version = "*"
    if specifiers:
        version_match = _VERSION_SPEC.search(specifiers)
        if version_match:
            version = version_match.group(1)
    return name, version


def parse_requirements_txt(file_path: Path | str) -> list[Dependency]:
    """Parse a requirements file and extract dependencies.

    Skips blank lines, comments, pip options (-r, -e, --index-url, ...) and
    URL or VCS requirements. requirements files have no dev/runtime split,
    so every dependency has is_dev=False.

    Raises:
        ManifestNotFoundError: If the file does not exist.
        ManifestParseError: If the file is not valid UTF-8 text.
    """
    path = Path(file_path).resolve()
    if not path.is_file():
        raise ManifestNotFoundError(str(path))

    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ManifestParseError(f"Cannot read {file_path}: {e}") from e

    dependencies: list[Dependency] = []
    for raw_line in content.splitlines():
        line = raw_line.strip()

        if not line or line.startswith("#"):
            continue
        if line.startswith("-"):
            continue
        if "://" in line or line.startswith("git+"):
            continue

        parsed = parse_requirement_line(line)
        if parsed is None:
            logger.debug(f"Skipping unparsable requirement line: {line!r}")
            continue

        name, version = parsed
        dependencies.append(
            Dependency(
                name=name,
                version=version,
                type=DependencyType.DIRECT,
                ecosystem=Ecosystem.PYPI,
                is_dev=False,
            )
        )

    logger.debug(f"Parsed {len(dependencies)} dependencies from {path}")
    return dependencies
