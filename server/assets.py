import logging
from dataclasses import dataclass
from typing import Literal

from fastapi import UploadFile
from sqlmodel import Field, SQLModel

from config import settings
from mime import get_image_type, parse_url

logger = logging.getLogger(__name__)


class ImageMeta(SQLModel):
    width: float
    height: float


class FontMeta(SQLModel):
    family: str
    style: str
    weight: int


class AssetBase(SQLModel):
    id: str
    name: str
    format: str
    description: str = ""
    created_at: str = ""
    project_id: str = ""
    size: int = Field(default=0, ge=0)


class ImageAsset(AssetBase):
    type: Literal["image"] = "image"
    meta: ImageMeta


class FontAsset(AssetBase):
    type: Literal["font"] = "font"
    meta: FontMeta


Asset = ImageAsset | FontAsset


@dataclass(frozen=True)
class UploadingFile:
    asset_id: str
    object_url: str
    file: UploadFile
    source: Literal["file"] = "file"


@dataclass(frozen=True)
class UploadingUrl:
    asset_id: str
    object_url: str
    url: str
    source: Literal["url"] = "url"


UploadingFileData = UploadingFile | UploadingUrl


def _resolve_mime_type(file_data: UploadingFileData) -> str | None:
    if file_data.source == "file":
        return get_image_type(file_data.file)
    if file_data.source == "url":
        return get_image_type(parse_url(file_data.url))
    raise ValueError(f"Unknown upload source: {file_data.source}")


def uploading_file_data_to_asset(file_data: UploadingFileData) -> Asset:
    """
    Build a placeholder asset for an upload that is still in flight.

    Only the name and type are guessed here; size, dimensions and project are
    filled in once the upload completes. Anything that is not an image is
    treated as a font.
    """
    mime_type = _resolve_mime_type(file_data) or settings.DEFAULT_MIME_TYPE
    parts = mime_type.split("/")
    subtype = parts[1] if len(parts) > 1 else ""

    if mime_type.startswith("image/"):
        logger.debug("Asset %s classified as image/%s", file_data.asset_id, subtype)
        return ImageAsset(
            id=file_data.asset_id,
            name=file_data.object_url,
            format=subtype,
            meta=ImageMeta(width=float("nan"), height=float("nan")),
        )

    logger.debug("Asset %s (%s) classified as font", file_data.asset_id, mime_type)
    return FontAsset(
        id=file_data.asset_id,
        name=file_data.object_url,
        format="woff2",
        meta=FontMeta(family="system", style="normal", weight=400),
    )
