class RotDetectorError(Exception):
    """Base exception for all rot-detector errors."""
    pass


class ManifestError(RotDetectorError):
    """Raised when a dependency manifest cannot be used. Fatal for a scan."""
    pass


class ManifestNotFoundError(ManifestError):
    """Raised when the manifest file (or a manifest inside a directory) does not exist."""

    def __init__(self, path: str, message: str = "File not found"):
        self.path = path
        super().__init__(f"{message}: {path}")


class ManifestParseError(ManifestError):
    """Raised when a manifest exists but its content cannot be parsed."""
    pass


class UnsupportedManifestError(ManifestError):
    """Raised for files that are neither package.json nor a requirements file."""
    pass


class RegistryError(RotDetectorError):
    """Base for registry fetch failures. Recorded per dependency, never fatal."""
    pass


class PackageNotFoundError(RegistryError):
    """Raised when a package does not exist upstream."""

    def __init__(self, package_name: str):
        self.package_name = package_name
        super().__init__(f"Package not found: {package_name}")


class RegistryFetchError(RegistryError):
    """Raised on network errors and non-404 HTTP failures."""

    def __init__(self, package_name: str, reason: str):
        self.package_name = package_name
        self.reason = reason
        super().__init__(f"Failed to fetch {package_name}: {reason}")
