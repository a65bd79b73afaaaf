from __future__ import annotations

from typing import Awaitable, Callable, Protocol

from starlette.requests import Request
from starlette.responses import Response

from core.storage.types import FileDescriptor

CallNext = Callable[[Request], Awaitable[Response]]
ServeHandler = Callable[[Request, CallNext], Awaitable[Response]]


class MediaStorageProvider(Protocol):
    backend_name: str

    async def save(self, file: FileDescriptor) -> str:
        ...

    async def exists(self, filename: str, target_dir: str | None = None) -> bool:
        ...

    async def read(self, filename: str) -> bytes:
        ...

    async def delete(self, filename: str) -> None:
        ...

    def serve(self) -> ServeHandler:
        ...

    def url_to_path(self, url: str) -> str:
        ...


def passthrough_handler() -> ServeHandler:
    """HTTP middleware that hands every request on untouched.

    Stored files are fetched straight from their public URL, so the host has
    nothing to serve.
    """

    async def passthrough(request: Request, call_next: CallNext) -> Response:
        return await call_next(request)

    return passthrough


def join_key(target_dir: str | None, filename: str) -> str:
    if not target_dir:
        return filename.lstrip("/")
    return f"{target_dir.rstrip('/')}/{filename.lstrip('/')}".lstrip("/")
