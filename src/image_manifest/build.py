"""Async functional manifest build pipeline."""

import logging
import sys
from typing import Any, Callable, Dict, Optional, Sequence

from .core.docker_client import DockerClient, ProgressCallback
from .core.types import ManifestConfig
from .exceptions import ConfigurationError
from .manifest.assembler import assemble_manifest, resolve_hostname
from .manifest.matcher import match_images
from .manifest.models import OutputManifest
from .manifest.tags import parse_repo_tags
from .manifest.writer import write_manifest

logger = logging.getLogger(__name__)


def echo_progress(reference: str, message: Dict[str, Any]) -> None:
    """Write one pull progress message to stderr."""
    parts = [message.get("id"), message.get("status"), message.get("progress")]
    text = " ".join(str(part) for part in parts if part)
    if text:
        sys.stderr.write(f"{reference}: {text}\n")
        sys.stderr.flush()


async def pull_images(
    client: DockerClient,
    references: Sequence[str],
    progress_callback: Optional[ProgressCallback] = None,
) -> None:
    """Pull every reference in order, stopping at the first failure.

    Args:
        client: Open Docker client
        references: Image references in request order
        progress_callback: Optional callback receiving pull progress

    Raises:
        AcquisitionError: If any pull fails
    """
    for index, reference in enumerate(references, start=1):
        logger.info("Pulling %s (%d/%d)", reference, index, len(references))
        await client.pull_image(reference, progress_callback)
        logger.debug("Pulled %s", reference)


async def build_image_manifest(
    config: ManifestConfig,
    progress_callback: Optional[ProgressCallback] = echo_progress,
    hostname_resolver: Callable[[], str] = resolve_hostname,
) -> OutputManifest:
    """요청된 이미지를 pull한 뒤 로컬 이미지와 대조하여 매니페스트 파일을 생성합니다.

    모든 작업은 순차적으로 실행되며, 하나라도 실패하면 즉시 중단되고
    매니페스트 파일은 생성되지 않습니다.

    Args:
        config: 빌드 설정
            - repo_tags: 요청할 이미지 참조 CSV (예: "repo/x:v1,repo/y:v1")
            - output: 매니페스트 출력 경로 (예: "manifest.json")
            - docker_uri: Docker 엔드포인트 (예: "unix:///var/run/docker.sock")
        progress_callback: pull 진행 메시지를 받을 콜백 (기본값: stderr 출력)
        hostname_resolver: 호스트명 조회 함수 (실패 시 빈 문자열)

    Returns:
        OutputManifest: 파일에 기록된 매니페스트

    Raises:
        ConfigurationError: 필수 설정이 없거나 요청 목록이 비어 있는 경우
        ParseError: repo_tags CSV 형식이 잘못된 경우
        AcquisitionError: 이미지 pull 실패 시
        EnumerationError: 로컬 이미지 목록 조회 실패 시
        OutputError: 매니페스트 파일을 쓸 수 없는 경우

    Examples:
        # 두 이미지의 매니페스트 생성
        config = ManifestConfig(
            repo_tags="repo/x:v1,repo/y:v1",
            output="manifest.json",
        )
        manifest = await build_image_manifest(config)
        print(f"{len(manifest.images)}개 이미지 기록 완료")
    """
    config.validate()
    client = DockerClient(config.docker_uri, config.api_version)

    references = parse_repo_tags(config.repo_tags)
    if not references:
        raise ConfigurationError("--repo-tags does not list any image references.")

    async with client:
        await pull_images(client, references, progress_callback)

        images = await client.list_images()
        logger.info("Found %d local image(s)", len(images))

    entries = match_images(images, references)
    manifest = assemble_manifest(entries, hostname_resolver=hostname_resolver)

    await write_manifest(manifest, config.output)
    return manifest
