"""Configuration types for the manifest builder."""

import os
from dataclasses import dataclass

from ..exceptions import ConfigurationError

DEFAULT_DOCKER_URI = "unix:///var/run/docker.sock"
DEFAULT_API_VERSION = "1.41"


def default_docker_uri() -> str:
    """Return the Docker endpoint from DOCKER_HOST or the local socket."""
    return os.environ.get("DOCKER_HOST") or DEFAULT_DOCKER_URI


@dataclass(frozen=True)
class ManifestConfig:
    """Settings for one manifest build.

    Attributes:
        repo_tags: CSV record listing the image references to include
        output: Path the JSON manifest is written to
        docker_uri: Docker Engine endpoint (unix://, tcp://, http(s)://)
        api_version: Docker Engine API version used in request paths
    """

    repo_tags: str
    output: str
    docker_uri: str = DEFAULT_DOCKER_URI
    api_version: str = DEFAULT_API_VERSION

    def validate(self) -> None:
        """Check that every required setting is present.

        Raises:
            ConfigurationError: If a required setting is empty
        """
        if not self.repo_tags:
            raise ConfigurationError("--repo-tags must be set.")
        if not self.output:
            raise ConfigurationError("--output must be set.")
        if not self.docker_uri:
            raise ConfigurationError("--docker-uri must not be empty.")
        if not self.api_version:
            raise ConfigurationError("--api-version must not be empty.")
