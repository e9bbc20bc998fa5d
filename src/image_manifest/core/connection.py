"""Docker Engine endpoint resolution."""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

import aiohttp

from ..exceptions import ConfigurationError

# Host used in request URLs when talking over a unix socket
UNIX_SOCKET_BASE_URL = "http://localhost"


@dataclass(frozen=True)
class DockerEndpoint:
    """Where and how to reach the Docker Engine API."""

    base_url: str
    socket_path: Optional[str] = None

    def create_connector(self) -> Optional[aiohttp.BaseConnector]:
        """Create the aiohttp connector for this endpoint.

        Returns:
            A UnixConnector for socket endpoints, None for TCP
        """
        if self.socket_path is not None:
            return aiohttp.UnixConnector(path=self.socket_path)
        return None


def resolve_endpoint(docker_uri: str) -> DockerEndpoint:
    """Translate a Docker URI into an API endpoint.

    Args:
        docker_uri: Docker URI
            - Unix socket: "unix:///var/run/docker.sock"
            - TCP: "tcp://127.0.0.1:2375" (plain HTTP)
            - HTTP(S): "https://docker.example.com:2376"

    Returns:
        DockerEndpoint with the base URL and optional socket path

    Raises:
        ConfigurationError: If the URI scheme is unsupported or the URI is incomplete
    """
    parts = urlsplit(docker_uri)
    scheme = parts.scheme.lower()

    if scheme == "unix":
        socket_path = parts.path or parts.netloc
        if not socket_path:
            raise ConfigurationError(f"No socket path in Docker URI: {docker_uri}")
        return DockerEndpoint(base_url=UNIX_SOCKET_BASE_URL, socket_path=socket_path)

    if scheme in ("tcp", "http", "https"):
        if not parts.netloc:
            raise ConfigurationError(f"No host in Docker URI: {docker_uri}")
        http_scheme = "http" if scheme == "tcp" else scheme
        base_path = parts.path.rstrip("/")
        return DockerEndpoint(base_url=f"{http_scheme}://{parts.netloc}{base_path}")

    raise ConfigurationError(f"Unsupported Docker URI scheme: {docker_uri}")
