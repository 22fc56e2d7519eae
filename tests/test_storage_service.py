import io
import os

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from airsoft_hub.services.storage_service import StorageService, StorageError, ThumbnailRejected


def _upload(content: bytes, filename: str, content_type=None) -> UploadFile:
    headers = Headers({"content-type": content_type}) if content_type else Headers({})
    return UploadFile(file=io.BytesIO(content), filename=filename, headers=headers)


async def test_save_thumbnail_writes_file(tmp_path):
    storage = StorageService(str(tmp_path / "uploads"))

    url = await storage.save_thumbnail(_upload(b"jpeg-bytes", "Photo.JPG", "image/jpeg"))

    filename = url.rsplit("/", 1)[1]
    assert url.startswith("/uploads/")
    assert filename.endswith(".jpg")
    assert len(filename) == 32 + len(".jpg")
    assert (tmp_path / "uploads" / filename).read_bytes() == b"jpeg-bytes"


async def test_missing_extension_and_content_type_accepted(tmp_path):
    storage = StorageService(str(tmp_path))
    url = await storage.save_thumbnail(_upload(b"data", "blob"))
    assert url.endswith(".img")


async def test_filenames_are_unique(tmp_path):
    storage = StorageService(str(tmp_path))
    first = await storage.save_thumbnail(_upload(b"a", "a.png", "image/png"))
    second = await storage.save_thumbnail(_upload(b"b", "a.png", "image/png"))
    assert first != second


async def test_size_limit(tmp_path):
    storage = StorageService(str(tmp_path), max_bytes=10)

    await storage.save_thumbnail(_upload(b"x" * 10, "ok.png", "image/png"))
    with pytest.raises(ThumbnailRejected, match="too large"):
        await storage.save_thumbnail(_upload(b"x" * 11, "big.png", "image/png"))


async def test_size_checked_before_content_type(tmp_path):
    storage = StorageService(str(tmp_path), max_bytes=1)
    with pytest.raises(ThumbnailRejected, match="too large"):
        await storage.save_thumbnail(_upload(b"xx", "doc.pdf", "application/pdf"))


async def test_non_image_rejected(tmp_path):
    storage = StorageService(str(tmp_path))
    with pytest.raises(ThumbnailRejected, match="must be an image"):
        await storage.save_thumbnail(_upload(b"%PDF", "doc.pdf", "application/pdf"))
    assert os.listdir(tmp_path) == []


async def test_unwritable_directory(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_bytes(b"")
    storage = StorageService(str(blocker / "uploads"))

    with pytest.raises(StorageError, match="Failed to prepare upload dir"):
        await storage.save_thumbnail(_upload(b"x", "a.png", "image/png"))


class _RecordingFile(io.BytesIO):
    def __init__(self, content: bytes):
        super().__init__(content)
        self.reads = []

    def read(self, size=-1):
        self.reads.append(size)
        return super().read(size)


async def test_declared_oversize_rejected_without_reading(tmp_path):
    storage = StorageService(str(tmp_path), max_bytes=10)
    body = _RecordingFile(b"x" * 1000)
    upload = UploadFile(file=body, size=1000, filename="big.png", headers=Headers({"content-type": "image/png"}))

    with pytest.raises(ThumbnailRejected, match="too large"):
        await storage.save_thumbnail(upload)
    assert body.reads == []


async def test_undeclared_size_reads_at_most_limit_plus_one(tmp_path):
    storage = StorageService(str(tmp_path), max_bytes=10)
    body = _RecordingFile(b"x" * 1000)
    upload = UploadFile(file=body, filename="big.png", headers=Headers({"content-type": "image/png"}))

    with pytest.raises(ThumbnailRejected, match="too large"):
        await storage.save_thumbnail(upload)
    assert body.reads == [11]
    assert os.listdir(tmp_path) == []


async def test_delete_thumbnail(tmp_path):
    storage = StorageService(str(tmp_path))
    url = await storage.save_thumbnail(_upload(b"a", "a.png", "image/png"))

    assert storage.delete_thumbnail(url)
    assert os.listdir(tmp_path) == []
    assert not storage.delete_thumbnail(url)
    assert not storage.delete_thumbnail(None)
    assert not storage.delete_thumbnail("https://cdn.example.com/a.png")
