"""Docker Engine API async client implementation."""

import inspect
import json
import logging
from typing import Any, Callable, Dict, List, Optional

import aiohttp

from .. import __version__
from ..exceptions import AcquisitionError, EnumerationError
from ..manifest.models import LocalImageRecord
from ..manifest.tags import split_reference
from .connection import resolve_endpoint
from .types import DEFAULT_API_VERSION, DEFAULT_DOCKER_URI

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, Dict[str, Any]], Any]


def _error_message(body: str) -> str:
    """Extract the daemon's error message from a response body."""
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        return body.strip()
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return body.strip()


def _decode_progress(line: bytes) -> Dict[str, Any]:
    """Decode one line of a pull progress stream."""
    text = line.decode("utf-8", errors="replace").strip()
    try:
        message = json.loads(text)
    except json.JSONDecodeError:
        return {"status": text}
    if not isinstance(message, dict):
        return {"status": text}
    return message


class DockerClient:
    """Docker Engine API async client for pulling and listing images."""

    def __init__(
        self,
        docker_uri: str = DEFAULT_DOCKER_URI,
        api_version: str = DEFAULT_API_VERSION,
    ) -> None:
        """Initialize the Docker client.

        Args:
            docker_uri: Docker URI (e.g., unix:///var/run/docker.sock)
            api_version: Engine API version used in request paths

        Raises:
            ConfigurationError: If the URI cannot be resolved
        """
        self.endpoint = resolve_endpoint(docker_uri)
        self.api_version = api_version.lstrip("v")
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "DockerClient":
        """Enter async context manager."""
        if not self.session:
            self.session = aiohttp.ClientSession(
                connector=self.endpoint.create_connector(),
                headers={"User-Agent": f"image-manifest/{__version__}"},
                timeout=aiohttp.ClientTimeout(total=None),
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()

    async def close(self) -> None:
        """Close the client session."""
        if self.session and not self.session.closed:
            await self.session.close()

    def _url(self, path: str) -> str:
        return f"{self.endpoint.base_url}/v{self.api_version}{path}"

    async def pull_image(
        self,
        reference: str,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> None:
        """Pull an image into the local image store.

        Progress messages are handed to the callback as they arrive and are
        otherwise discarded.

        Args:
            reference: Image reference (e.g., registry.io/app:v1)
            progress_callback: Optional callback receiving (reference, message)

        Raises:
            AcquisitionError: If the daemon rejects or fails the pull
        """
        image, tag = split_reference(reference)
        params = {"fromImage": image}
        if tag:
            params["tag"] = tag

        try:
            async with self.session.post(
                self._url("/images/create"), params=params
            ) as resp:
                if resp.status >= 400:
                    body = await resp.text()
                    raise AcquisitionError(
                        f"Failed to pull {reference}: {_error_message(body)}"
                    )

                async for line in resp.content:
                    if not line.strip():
                        continue

                    message = _decode_progress(line)
                    if message.get("error"):
                        raise AcquisitionError(
                            f"Failed to pull {reference}: {message['error']}"
                        )

                    if progress_callback:
                        if inspect.iscoroutinefunction(progress_callback):
                            await progress_callback(reference, message)
                        else:
                            progress_callback(reference, message)

        except aiohttp.ClientError as e:
            raise AcquisitionError(f"Failed to pull {reference}: {e}") from e

    async def list_images(self) -> List[LocalImageRecord]:
        """List every image in the local image store.

        Returns:
            Local image records in the order the daemon reports them

        Raises:
            EnumerationError: If listing fails
        """
        try:
            async with self.session.get(
                self._url("/images/json"), params={"all": "1"}
            ) as resp:
                if resp.status >= 400:
                    body = await resp.text()
                    raise EnumerationError(
                        f"Failed to list images: {_error_message(body)}"
                    )
                data = await resp.json(content_type=None)

        except aiohttp.ClientError as e:
            raise EnumerationError(f"Failed to list images: {e}") from e
        except json.JSONDecodeError as e:
            raise EnumerationError(f"Invalid image list from daemon: {e}") from e

        if not isinstance(data, list):
            raise EnumerationError("Invalid image list from daemon: expected an array")

        for item in data:
            if not isinstance(item, dict):
                raise EnumerationError(
                    f"Invalid image list from daemon: expected an object, got {item!r}"
                )

        return [LocalImageRecord.from_api(item) for item in data]
