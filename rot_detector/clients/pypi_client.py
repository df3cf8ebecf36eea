"""PyPI JSON API client."""

import contextlib
import logging
from datetime import datetime
from typing import Any
from urllib.parse import quote

from rot_detector.clients.base_client import RegistryClient
from rot_detector.consts import PYPI_API_URL, PYPI_REPOSITORY_URL_KEYS
from rot_detector.models.common import ensure_utc
from rot_detector.models.model_dependency import Ecosystem
from rot_detector.models.model_package import Maintainer, PackageMetadata

logger = logging.getLogger(__name__)

LICENSE_CLASSIFIER_PREFIX = "License ::"


def _parse_upload_time(release_file: dict[str, Any]) -> datetime | None:
    """Parse a release file's upload time. Naive values are UTC on PyPI."""
    value = release_file.get("upload_time_iso_8601") or release_file.get("upload_time")
    if not isinstance(value, str) or not value:
        return None
    with contextlib.suppress(ValueError):
        return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
    return None


def _extract_license(info: dict[str, Any]) -> str | None:
    """SPDX license_expression, else the free-text license, else the trove classifier."""
    for key in ("license_expression", "license"):
        value = info.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()

    for classifier in info.get("classifiers") or []:
        if classifier.startswith(LICENSE_CLASSIFIER_PREFIX):
            name = classifier.split("::")[-1].strip()
            if name and name != "OSI Approved":
                return name
    return None


def _extract_repository_url(info: dict[str, Any]) -> str | None:
    project_urls = info.get("project_urls") or {}
    if not isinstance(project_urls, dict):
        return None
    by_key = {str(k).strip().lower(): v for k, v in project_urls.items() if v}
    for key in PYPI_REPOSITORY_URL_KEYS:
        if key in by_key:
            return by_key[key]
    return None


class PyPIClient(RegistryClient):
    """Client for the PyPI JSON API."""

    BASE_URL = PYPI_API_URL

    @property
    def ecosystem(self) -> Ecosystem:
        return Ecosystem.PYPI

    async def fetch_metadata(self, package_name: str) -> PackageMetadata:
        data = await self._get_json(f"/{quote(package_name)}/json", package_name)
        return self.parse_metadata(package_name, data)

    def parse_metadata(self, package_name: str, data: dict[str, Any]) -> PackageMetadata:
        """Parse a PyPI JSON document into PackageMetadata."""
        info = data.get("info") or {}
        latest_version = info.get("version") or ""

        # First upload of the latest release
        last_published = None
        release_files = (data.get("releases") or {}).get(latest_version) or data.get("urls") or []
        upload_times = [t for t in (_parse_upload_time(f) for f in release_files) if t is not None]
        if upload_times:
            last_published = min(upload_times)

        # PyPI has a single maintainer or author field, not a list
        maintainers: list[Maintainer] = []
        if info.get("maintainer"):
            maintainers.append(
                Maintainer(name=info["maintainer"], email=info.get("maintainer_email") or None)
            )
        elif info.get("author"):
            maintainers.append(
                Maintainer(name=info["author"], email=info.get("author_email") or None)
            )

        return PackageMetadata(
            name=package_name,
            version=latest_version,
            last_published=last_published,
            maintainers=maintainers,
            license=_extract_license(info),
            repository_url=_extract_repository_url(info),
            homepage=info.get("home_page") or None,
            description=info.get("summary") or None,
        )
