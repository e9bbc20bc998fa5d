"""Serialization and persistence of the output manifest."""

import json
import logging
from pathlib import Path
from typing import Union

import aiofiles
import aiofiles.os

from ..exceptions import OutputError
from .models import OutputManifest

logger = logging.getLogger(__name__)


def render_manifest(manifest: OutputManifest) -> str:
    """Render the manifest as indented JSON with a stable key order."""
    return json.dumps(manifest.to_dict(), indent=2) + "\n"


async def write_manifest(manifest: OutputManifest, path: Union[str, Path]) -> Path:
    """매니페스트를 JSON 파일로 저장합니다.

    파일이 없으면 생성하고, 있으면 내용을 덮어씁니다.

    Args:
        manifest: 저장할 매니페스트
        path: 출력 파일 경로 (예: "manifest.json", "/var/lib/builds/images.json")

    Returns:
        Path: 저장된 파일 경로

    Raises:
        OutputError: 파일을 생성하거나 쓸 수 없는 경우

    Examples:
        # 매니페스트 저장
        manifest = assemble_manifest(entries)
        await write_manifest(manifest, "manifest.json")
    """
    output_path = Path(path)
    partial_path = output_path.with_name(f".{output_path.name}.partial")
    content = render_manifest(manifest)

    # The destination only ever holds a complete manifest
    try:
        async with aiofiles.open(partial_path, "w", encoding="utf-8") as f:
            await f.write(content)
        await aiofiles.os.replace(partial_path, output_path)
    except OSError as e:
        if await aiofiles.os.path.exists(partial_path):
            await aiofiles.os.remove(partial_path)
        raise OutputError(f"Failed to write manifest to {output_path}: {e}") from e

    logger.info("Wrote %d image(s) to %s", len(manifest.images), output_path)
    return output_path
