"""Command-line entrypoint for building image manifests."""

import argparse
import asyncio
import logging
from typing import Optional, Sequence

from .build import build_image_manifest
from .core.types import DEFAULT_API_VERSION, ManifestConfig, default_docker_uri
from .exceptions import ManifestBuilderError

logger = logging.getLogger("image_manifest")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-manifest",
        description="Pull Docker images and write a JSON manifest of their IDs and git refs.",
    )
    parser.add_argument(
        "--docker-uri",
        dest="docker_uri",
        default=default_docker_uri(),
        help="The docker URI (default: $DOCKER_HOST or the local socket).",
    )
    parser.add_argument(
        "--repo-tags",
        dest="repo_tags",
        default="",
        help="A CSV record listing the Docker repo tags to generate a manifest from.",
    )
    parser.add_argument(
        "--output",
        default="",
        help="The file to write the JSON to.",
    )
    parser.add_argument(
        "--api-version",
        dest="api_version",
        default=DEFAULT_API_VERSION,
        help=f"Docker Engine API version (default: {DEFAULT_API_VERSION}).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    config = ManifestConfig(
        repo_tags=args.repo_tags,
        output=args.output,
        docker_uri=args.docker_uri,
        api_version=args.api_version,
    )

    try:
        asyncio.run(build_image_manifest(config))
    except ManifestBuilderError as e:
        logger.error("error: %s", e)
        return 1

    return 0

