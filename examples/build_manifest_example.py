"""Example usage of the image manifest builder."""

import asyncio
import logging
import sys

# Add parent directory to path
sys.path.insert(0, "src")

from image_manifest import (
    DockerClient,
    ManifestBuilderError,
    ManifestConfig,
    build_image_manifest,
    match_images,
    parse_repo_tags,
)

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main():
    """Pull two images and write their manifest."""
    config = ManifestConfig(
        repo_tags="alpine:3.20,busybox:latest",
        output="manifest.json",
    )

    try:
        manifest = await build_image_manifest(config)
        for entry in manifest.images:
            logger.info(f"{entry.repo_tag} -> {entry.image_id} ({entry.git_ref or 'no git ref'})")

    except ManifestBuilderError as e:
        logger.error(f"Manifest build failed: {e}")


async def inspect_without_pulling():
    """Match already-present images without pulling or writing anything."""
    references = parse_repo_tags("alpine:3.20,busybox:latest")

    try:
        async with DockerClient() as client:
            images = await client.list_images()

        entries = match_images(images, references)
        logger.info(f"{len(entries)} of {len(references)} references are present locally")

    except ManifestBuilderError as e:
        logger.error(f"Listing failed: {e}")


if __name__ == "__main__":
    asyncio.run(main())
    asyncio.run(inspect_without_pulling())
