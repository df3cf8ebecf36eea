"""Base registry client defining the registry contract."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from rot_detector.consts import REQUEST_TIMEOUT_SECONDS, USER_AGENT
from rot_detector.exceptions import PackageNotFoundError, RegistryFetchError
from rot_detector.models.model_dependency import Ecosystem
from rot_detector.models.model_package import PackageMetadata

logger = logging.getLogger(__name__)


class RegistryClient(ABC):
    """Abstract base class for package registry clients.

    Subclasses implement fetch_metadata; the base owns the HTTP client,
    the request timeout and the mapping of HTTP failures onto
    PackageNotFoundError / RegistryFetchError. Failed requests are not
    retried.
    """

    BASE_URL: str = ""

    def __init__(
        self,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize registry client.

        Args:
            timeout: Per-request timeout in seconds.
            client: Pre-built HTTP client (mainly for tests). Created lazily if None.
        """
        self.timeout = timeout
        self._client = client

    @property
    @abstractmethod
    def ecosystem(self) -> Ecosystem:
        """Return the ecosystem this client serves."""
        ...

    @abstractmethod
    async def fetch_metadata(self, package_name: str) -> PackageMetadata:
        """Fetch metadata for a package.

        Raises:
            PackageNotFoundError: If the package does not exist upstream.
            RegistryFetchError: On any other HTTP or network failure.
        """
        ...

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                timeout=httpx.Timeout(self.timeout),
                headers={"Accept": "application/json", "User-Agent": USER_AGENT},
            )
        return self._client

    async def _get_json(self, endpoint: str, package_name: str) -> dict[str, Any]:
        """GET an endpoint and decode its JSON body.

        Args:
            endpoint: Path relative to BASE_URL.
            package_name: Package the request is for (used in errors).

        Returns:
            Decoded JSON object.
        """
        client = await self._get_client()
        try:
            response = await client.get(endpoint)
            if response.status_code == 404:
                raise PackageNotFoundError(package_name)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise RegistryFetchError(package_name, f"HTTP {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            raise RegistryFetchError(package_name, f"timed out after {self.timeout:.0f}s") from e
        except httpx.HTTPError as e:
            raise RegistryFetchError(package_name, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise RegistryFetchError(package_name, f"invalid JSON response: {e}") from e

        if not isinstance(data, dict):
            raise RegistryFetchError(package_name, "unexpected response format")

        logger.debug(f"Fetched {self.ecosystem.value} metadata for {package_name}")
        return data

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "RegistryClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
