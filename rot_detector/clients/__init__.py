"""Clients for package registries and source-hosting platforms."""

from rot_detector.clients.base_client import RegistryClient
from rot_detector.clients.github_client import GitHubClient, parse_github_url
from rot_detector.clients.npm_client import NpmClient, clean_git_url
from rot_detector.clients.pypi_client import PyPIClient

__all__ = [
    "GitHubClient",
    "NpmClient",
    "PyPIClient",
    "RegistryClient",
    "clean_git_url",
    "parse_github_url",
]
