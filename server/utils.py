import hashlib

from fastapi import UploadFile


async def get_file_hash(data: bytes) -> str:
    sha256_hash = hashlib.sha256()
    sha256_hash.update(data)
    return sha256_hash.hexdigest()


async def get_sha256_hash(data: str) -> str:
    return await get_file_hash(data.encode("utf-8"))


async def get_sha256_hash_of_file(file: UploadFile) -> str:
    """Hash the whole upload, then rewind it so it can be read again."""
    file_bytes = await file.read()
    await file.seek(0)
    return await get_file_hash(file_bytes)
