"""Manifest parsing, matching, assembly and output."""

from .matcher import GIT_REF_LABEL, match_images
from .models import LocalImageRecord, ManifestEntry, OutputManifest

__all__ = [
    "GIT_REF_LABEL",
    "LocalImageRecord",
    "ManifestEntry",
    "OutputManifest",
    "match_images",
]
