import mimetypes

from fastapi import APIRouter, File, Query, UploadFile
from fastapi.responses import Response

from core.response_envelope import document_response
from schemas.media_schema import MediaDeletedOut, MediaExistsOut, StoredMediaOut, UrlToPathOut, UrlToPathRequest
from services.media_service import media_exists, read_media, remove_media, resolve_key, save_upload

router = APIRouter(prefix="/media", tags=["Media"])


@router.post("/upload")
@document_response(
    message="Media uploaded",
    status_code=201,
    success_example={
        "url": "https://demo.storage.googleapis.com/images/2024/03/photo-1709600000000.png",
        "key": "images/2024/03/photo-1709600000000.png",
        "category": "images",
    },
    response_codes={400: "Invalid file", 500: "Storage not configured"},
)
async def upload_media(file: UploadFile = File(...)):
    stored = await save_upload(file)
    return StoredMediaOut.model_validate(stored)


@router.get("/exists")
@document_response(message="Existence checked")
async def check_media_exists(filename: str = Query(min_length=1), target_dir: str | None = Query(default=None)):
    exists = await media_exists(filename, target_dir)
    return MediaExistsOut(filename=filename, target_dir=target_dir, exists=exists)


@router.get("/content/{key:path}")
async def get_media_content(key: str):
    data = await read_media(key)
    media_type, _ = mimetypes.guess_type(key)
    return Response(content=data, media_type=media_type or "application/octet-stream")


@router.post("/url-to-path")
@document_response(message="Storage key resolved")
async def url_to_path(payload: UrlToPathRequest):
    return UrlToPathOut(url=payload.url, key=resolve_key(payload.url))


@router.delete("/{key:path}")
@document_response(message="Media deleted", success_example={"key": "images/2024/03/photo.png", "deleted": True})
async def delete_media(key: str):
    await remove_media(key)
    return MediaDeletedOut(key=key)
