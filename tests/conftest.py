import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def make_upload():
    def _make(content: bytes = b"", filename: str = "upload.png", content_type: str | None = "image/png"):
        headers = Headers({"content-type": content_type}) if content_type else Headers({})
        return UploadFile(file=io.BytesIO(content), size=len(content), filename=filename, headers=headers)

    return _make
