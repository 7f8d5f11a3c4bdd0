import logging

from fastapi import FastAPI, File, Form, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel

from assets import UploadingFile, UploadingUrl, uploading_file_data_to_asset
from config import settings
from mime import (
    ImageExtension,
    get_image_extension_for_mime_type,
    get_image_name,
    get_image_name_and_type,
    get_image_type,
    parse_url,
)
from utils import get_sha256_hash, get_sha256_hash_of_file

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)
logger.info(
    "Using default mime type %s, max file size %d bytes",
    settings.DEFAULT_MIME_TYPE,
    settings.MAX_FILE_SIZE,
)


class HashRequest(BaseModel):
    data: str


class UploadingUrlRequest(BaseModel):
    asset_id: str
    object_url: str
    url: str


app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/extensions/{mime_type:path}")
async def get_extension(mime_type: str):
    extension = get_image_extension_for_mime_type(mime_type)
    if extension is None:
        raise HTTPException(status_code=404, detail=f"Unknown image mime type: {mime_type}")
    return {"extension": extension}


@app.get("/name-and-type")
async def get_name_and_type(
        url: str,
        default_extension: ImageExtension | None = Query(default=None),
):
    # Anything with a scheme is parsed so its query string can be inspected.
    try:
        parsed = parse_url(url)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid url: {e}")
    source = parsed if parsed.scheme else url
    file_name, mime_type = get_image_name_and_type(source, default_extension)
    return {"file_name": file_name, "mime_type": mime_type}


@app.post("/sha256")
async def hash_text(request: HashRequest):
    return {"hash": await get_sha256_hash(request.data)}


@app.post("/sha256/file")
async def hash_file(file: UploadFile = File(...)):
    if file.size is not None and file.size > settings.MAX_FILE_SIZE:
        raise HTTPException(status_code=413, detail="File is too large")

    file_hash = await get_sha256_hash_of_file(file)
    logger.debug("Hashed %s: %s", file.filename, file_hash)

    return {
        "hash": file_hash,
        "file_name": get_image_name(file),
        "mime_type": get_image_type(file),
    }


@app.post("/assets/preview/url")
async def preview_url_asset(request: UploadingUrlRequest):
    try:
        asset = uploading_file_data_to_asset(
            UploadingUrl(asset_id=request.asset_id, object_url=request.object_url, url=request.url)
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid url: {e}")
    # model_dump_json writes the NaN placeholders as null
    return Response(content=asset.model_dump_json(), media_type="application/json")


@app.post("/assets/preview/file")
async def preview_file_asset(
        file: UploadFile = File(...),
        asset_id: str = Form(...),
        object_url: str = Form(...),
):
    asset = uploading_file_data_to_asset(
        UploadingFile(asset_id=asset_id, object_url=object_url, file=file)
    )
    return Response(content=asset.model_dump_json(), media_type="application/json")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
