"""Matching of local images against requested references."""

import logging
from collections import Counter
from typing import Iterable, Mapping, Sequence

from .models import LocalImageRecord, ManifestEntry

logger = logging.getLogger(__name__)

GIT_REF_LABEL = "org.cyverse.git-ref"


def extract_git_ref(labels: Mapping[str, str] | None) -> str:
    """Return the git ref label value, or an empty string if unset."""
    if not labels:
        return ""
    return labels.get(GIT_REF_LABEL, "")


def match_images(
    images: Iterable[LocalImageRecord], requested: Sequence[str]
) -> list[ManifestEntry]:
    """로컬 이미지 목록에서 요청된 참조와 일치하는 태그를 찾아 매니페스트 항목을 만듭니다.

    이미지 순서, 이미지별 태그 순서, 요청 목록 순서대로 비교하며
    일치할 때마다 항목을 하나씩 생성합니다. 중복 제거는 하지 않으므로
    같은 참조를 두 번 요청하면 일치하는 태그마다 항목이 두 개 생성됩니다.
    비교는 대소문자를 구분하는 정확한 문자열 비교입니다.

    Args:
        images: Docker에서 조회한 로컬 이미지 목록 (조회된 순서 그대로)
        requested: 요청된 이미지 참조 목록 (예: ["repo/x:v1", "repo/y:v1"])

    Returns:
        list[ManifestEntry]: 일치한 (태그, 이미지 ID, git ref) 항목 목록

    Examples:
        images = [
            LocalImageRecord(id="sha1", tags=["repo/x:v1", "repo/x:v2"]),
            LocalImageRecord(
                id="sha2",
                tags=["repo/y:v1"],
                labels={"org.cyverse.git-ref": "abcd"},
            ),
        ]
        entries = match_images(images, ["repo/x:v1", "repo/y:v1"])
        # 결과: [ManifestEntry("repo/x:v1", "sha1", ""),
        #        ManifestEntry("repo/y:v1", "sha2", "abcd")]
    """
    # Each (record, tag) pair emits once per occurrence in the requested list
    request_counts = Counter(requested)
    entries: list[ManifestEntry] = []
    matched: set[str] = set()

    for image in images:
        git_ref = extract_git_ref(image.labels)
        for tag in image.tags:
            count = request_counts.get(tag, 0)
            if not count:
                continue

            matched.add(tag)
            entries.extend(
                ManifestEntry(repo_tag=tag, image_id=image.id, git_ref=git_ref)
                for _ in range(count)
            )

    for reference in request_counts:
        if reference not in matched:
            logger.warning("No local image is tagged %s; omitting it", reference)

    return entries
