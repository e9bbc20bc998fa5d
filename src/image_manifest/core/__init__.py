"""Docker Engine connection and configuration."""

from .connection import DockerEndpoint, resolve_endpoint
from .types import ManifestConfig

__all__ = ["DockerEndpoint", "ManifestConfig", "resolve_endpoint"]
