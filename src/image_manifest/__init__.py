"""Image Manifest - Build provenance manifests for pulled Docker images."""

__version__ = "0.1.0"

from .build import build_image_manifest, pull_images
from .core.docker_client import DockerClient
from .core.types import ManifestConfig
from .exceptions import (
    AcquisitionError,
    ConfigurationError,
    EnumerationError,
    ManifestBuilderError,
    OutputError,
    ParseError,
)
from .manifest.assembler import assemble_manifest, resolve_hostname
from .manifest.matcher import extract_git_ref, match_images
from .manifest.models import LocalImageRecord, ManifestEntry, OutputManifest
from .manifest.tags import parse_repo_tags, split_reference
from .manifest.writer import render_manifest, write_manifest

__all__ = [
    "build_image_manifest",
    "pull_images",
    "DockerClient",
    "ManifestConfig",
    "ManifestBuilderError",
    "ConfigurationError",
    "ParseError",
    "AcquisitionError",
    "EnumerationError",
    "OutputError",
    "assemble_manifest",
    "resolve_hostname",
    "extract_git_ref",
    "match_images",
    "LocalImageRecord",
    "ManifestEntry",
    "OutputManifest",
    "parse_repo_tags",
    "split_reference",
    "render_manifest",
    "write_manifest",
]
