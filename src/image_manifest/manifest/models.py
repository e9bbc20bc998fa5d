"""Data models for manifest building."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class LocalImageRecord:
    """One image in the local Docker image store."""

    id: str
    tags: List[str] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "LocalImageRecord":
        """Build a record from a Docker Engine /images/json item.

        RepoTags and Labels are null for untagged or unlabelled images.
        """
        return cls(
            id=data.get("Id", ""),
            tags=list(data.get("RepoTags") or []),
            labels=dict(data.get("Labels") or {}),
        )


@dataclass
class ManifestEntry:
    """A requested reference matched to a local image."""

    repo_tag: str
    image_id: str
    git_ref: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "repo-tag": self.repo_tag,
            "image-id": self.image_id,
            "git-ref": self.git_ref,
        }


@dataclass
class OutputManifest:
    """Top-level record written to the manifest file."""

    hostname: str
    date: str
    images: List[ManifestEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hostname": self.hostname,
            "date": self.date,
            "images": [entry.to_dict() for entry in self.images],
        }
