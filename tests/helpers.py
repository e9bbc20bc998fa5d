"""Test helpers: a fake Docker Engine daemon served over a unix socket."""

import json
import shutil
import tempfile
from pathlib import Path

from aiohttp import web

from image_manifest.core.types import DEFAULT_API_VERSION

API_PREFIX = f"/v{DEFAULT_API_VERSION}"


def image_item(image_id: str, repo_tags=None, labels=None) -> dict:
    """Build an /images/json item the way the daemon reports it."""
    return {
        "Id": image_id,
        "ParentId": "",
        "RepoTags": repo_tags,
        "RepoDigests": [],
        "Created": 1700000000,
        "Size": 1024,
        "Labels": labels,
        "Containers": -1,
    }


class FakeDockerDaemon:
    """Minimal Docker Engine API stand-in.

    Pulling a reference that is in ``pull_errors`` answers 404, and one in
    ``stream_errors`` reports the failure inside a 200 progress stream.
    """

    def __init__(self) -> None:
        self.images: list[dict] = []
        self.pulled: list[str] = []
        self.pull_params: list[dict] = []
        self.pull_errors: set[str] = set()
        self.stream_errors: set[str] = set()
        self.list_status = 200
        self.list_body: object = None
        self._tmpdir = tempfile.mkdtemp(prefix="dkr")
        self.socket_path = str(Path(self._tmpdir) / "docker.sock")
        self._runner: web.AppRunner | None = None

    @property
    def uri(self) -> str:
        return f"unix://{self.socket_path}"

    def _app(self) -> web.Application:
        app = web.Application()
        app.router.add_post(f"{API_PREFIX}/images/create", self._handle_create)
        app.router.add_get(f"{API_PREFIX}/images/json", self._handle_list)
        return app

    async def _handle_create(self, request: web.Request) -> web.StreamResponse:
        image = request.query.get("fromImage", "")
        tag = request.query.get("tag", "")
        reference = f"{image}:{tag}" if tag else image
        self.pulled.append(reference)
        self.pull_params.append(dict(request.query))

        if reference in self.pull_errors:
            return web.json_response(
                {"message": f"pull access denied for {image}"}, status=404
            )

        resp = web.StreamResponse(headers={"Content-Type": "application/json"})
        await resp.prepare(request)
        await resp.write(
            json.dumps({"status": f"Pulling from {image}", "id": tag}).encode() + b"\r\n"
        )
        if reference in self.stream_errors:
            await resp.write(
                json.dumps({"error": "unexpected EOF"}).encode() + b"\r\n"
            )
        else:
            await resp.write(
                json.dumps({"status": f"Status: Image is up to date for {reference}"}).encode()
                + b"\r\n"
            )
        await resp.write_eof()
        return resp

    async def _handle_list(self, request: web.Request) -> web.Response:
        if self.list_status != 200:
            return web.json_response({"message": "daemon error"}, status=self.list_status)
        body = self.images if self.list_body is None else self.list_body
        return web.json_response(body)

    async def __aenter__(self) -> "FakeDockerDaemon":
        self._runner = web.AppRunner(self._app())
        await self._runner.setup()
        site = web.UnixSite(self._runner, self.socket_path)
        await site.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
        shutil.rmtree(self._tmpdir, ignore_errors=True)
