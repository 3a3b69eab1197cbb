import io
import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from app.utils.file_upload import AttachmentRejectedError, read_upload
from app.tests.constants.contact import ContactTestConstants


def make_upload(filename, content, content_type):
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.mark.asyncio
class TestReadUpload:
    async def test_no_upload(self):
        assert await read_upload(None) is None

    async def test_reads_allowed_file(self):
        upload = make_upload(
            ContactTestConstants.PDF_FILENAME.value,
            ContactTestConstants.PDF_CONTENT.value,
            ContactTestConstants.PDF_CONTENT_TYPE.value,
        )

        attachment = await read_upload(upload)

        assert attachment.content == ContactTestConstants.PDF_CONTENT.value
        assert attachment.filename == ContactTestConstants.PDF_FILENAME.value
        assert attachment.content_type == ContactTestConstants.PDF_CONTENT_TYPE.value
        assert attachment.size == len(ContactTestConstants.PDF_CONTENT.value)

    async def test_content_type_parameters_are_ignored(self):
        upload = make_upload("notes.txt", b"hello", "text/plain; charset=utf-8")

        attachment = await read_upload(upload)

        assert attachment.content_type == "text/plain; charset=utf-8"

    async def test_rejects_disallowed_type(self):
        upload = make_upload("archive.zip", b"PK\x03\x04", "application/zip")

        with pytest.raises(AttachmentRejectedError) as exc_info:
            await read_upload(upload)

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "File type not allowed"

    async def test_rejects_oversized_file(self):
        upload = make_upload("photo.png", b"\x89PNG" + b"\x00" * 20, "image/png")

        with pytest.raises(AttachmentRejectedError) as exc_info:
            await read_upload(upload, max_bytes=10)

        assert exc_info.value.status_code == 413

    async def test_file_at_limit_is_accepted(self):
        upload = make_upload("photo.png", b"\x00" * 10, "image/png")

        attachment = await read_upload(upload, max_bytes=10)

        assert attachment.size == 10
