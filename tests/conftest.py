"""Test configuration and fixtures."""

import pytest
import pytest_asyncio

from image_manifest.core.types import ManifestConfig
from tests.helpers import FakeDockerDaemon, image_item


@pytest_asyncio.fixture
async def docker_daemon():
    """Start a fake Docker daemon on a temporary unix socket."""
    async with FakeDockerDaemon() as daemon:
        yield daemon


@pytest.fixture
def scenario_images():
    """Local inventory from the two-image end-to-end scenario."""
    return [
        image_item("sha1", ["repo/x:v1", "repo/x:v2"]),
        image_item("sha2", ["repo/y:v1"], {"org.cyverse.git-ref": "abcd"}),
    ]


@pytest.fixture
def make_config(tmp_path):
    """Build a ManifestConfig writing into the test's temporary directory."""

    def _make(docker_uri: str, repo_tags: str, output_name: str = "manifest.json"):
        return ManifestConfig(
            repo_tags=repo_tags,
            output=str(tmp_path / output_name),
            docker_uri=docker_uri,
        )

    return _make


def pytest_configure(config):
    """Configure pytest markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as unit test (default)")
