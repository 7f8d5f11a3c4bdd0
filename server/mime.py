"""Guess image file names and mime types from urls and uploaded files."""
import re
import uuid
from types import MappingProxyType
from typing import Literal
from urllib.parse import SplitResult, parse_qsl, urlsplit

from starlette.datastructures import UploadFile

ImageExtension = Literal[".gif", ".ico", ".jpeg", ".jpg", ".png", ".svg", ".webp"]

# Order matters: lookups return the first match.
IMAGE_EXTENSION_TO_MIME: tuple[tuple[ImageExtension, str], ...] = (
    (".gif", "image/gif"),
    (".ico", "image/x-icon"),
    (".jpeg", "image/jpeg"),
    (".jpg", "image/jpeg"),
    (".png", "image/png"),
    (".svg", "image/svg+xml"),
    (".webp", "image/webp"),
)

IMAGE_EXTENSIONS = tuple(ext for ext, _ in IMAGE_EXTENSION_TO_MIME)
IMAGE_MIME_TYPES = tuple(mime for _, mime in IMAGE_EXTENSION_TO_MIME)

_MIME_BY_EXTENSION = MappingProxyType(dict(IMAGE_EXTENSION_TO_MIME))

_CONTENT_DISPOSITION_KEY = re.compile(r"\bcontent-disposition\b", re.IGNORECASE | re.ASCII)
_CONTENT_TYPE_KEY = re.compile(r"\bcontent-type\b", re.IGNORECASE | re.ASCII)
_FILENAME_VALUE = re.compile(r'\bfilename=(?:"([^"]+)"|([^;]+))', re.IGNORECASE | re.ASCII)
_MIME_TYPE_VALUE = re.compile(r"\b(image/[\w+-]+)", re.IGNORECASE | re.ASCII)

ImageSource = UploadFile | SplitResult | str


def parse_url(url: str) -> SplitResult:
    return urlsplit(url)


def get_image_extension_for_mime_type(mime_type: str) -> ImageExtension | None:
    for ext, mime in IMAGE_EXTENSION_TO_MIME:
        if mime == mime_type:
            return ext
    return None


def _query_params(url: SplitResult) -> list[tuple[str, str]]:
    """Pairs each query key, in order, with the first value given for it."""
    pairs = parse_qsl(url.query, keep_blank_values=True)
    first_values: dict[str, str] = {}
    for key, value in pairs:
        first_values.setdefault(key, value)
    return [(key, first_values[key]) for key, _ in pairs]


def get_image_name_and_type(
    url: SplitResult | str,
    default_extension: ImageExtension | None = None,
) -> tuple[str | None, str | None]:
    """
    Infer ``(file_name, mime_type)`` for an image url.

    A plain string is only checked for a known extension suffix. A parsed url
    is also searched for ``content-disposition`` / ``content-type`` hints in
    its query string, e.g. signed storage urls. The extension always wins over
    a hinted mime type. When nothing matches, ``default_extension`` is used;
    passing one guarantees a non-empty result.
    """
    if isinstance(url, str):
        extension = next(
            (ext for ext in IMAGE_EXTENSIONS if url.endswith(ext)), default_extension
        )
        if extension is None:
            return None, None
        return url, _MIME_BY_EXTENSION[extension]

    basename = url.path.split("/")[-1]
    params = _query_params(url)

    file_name: str | None = None
    mime_type: str | None = None
    extension: ImageExtension | None = None

    for ext in IMAGE_EXTENSIONS:
        found_in_params = False

        for key, value in params:
            if not file_name and _CONTENT_DISPOSITION_KEY.search(key):
                match = _FILENAME_VALUE.search(value)
                if match:
                    file_name = match.group(1) or match.group(2) or ""
            elif not mime_type and _CONTENT_TYPE_KEY.search(key):
                match = _MIME_TYPE_VALUE.search(value)
                if match:
                    mime_type = match.group(1)
            elif not found_in_params and value.endswith(ext):
                found_in_params = True

        if basename.endswith(ext):
            if not (file_name and file_name.endswith(ext)):
                file_name = basename
            extension = ext
            break

        if (
            found_in_params
            or (file_name and file_name.endswith(ext))
            or mime_type == _MIME_BY_EXTENSION[ext]
        ):
            extension = ext
            break

    if extension is None:
        extension = default_extension
    if extension is None:
        return None, None

    mime_type = _MIME_BY_EXTENSION[extension]
    if not file_name:
        file_name = f"{uuid.uuid4().hex}.{extension.lstrip('.')}"
    return file_name, mime_type


def get_image_name(source: ImageSource) -> str | None:
    if isinstance(source, UploadFile):
        return source.filename
    return get_image_name_and_type(source)[0]


def get_image_type(source: ImageSource) -> str | None:
    if isinstance(source, UploadFile):
        return source.content_type
    return get_image_name_and_type(source)[1]
