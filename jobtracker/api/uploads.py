from typing import Optional

from fastapi import UploadFile

from jobtracker.schemas.analysis import UploadedDocument
from jobtracker.services.analysis_pipeline import build_document


async def read_upload(file: Optional[UploadFile]) -> Optional[UploadedDocument]:
    """Read a multipart upload into an UploadedDocument (None when no file was sent)."""
    if file is None or not file.filename:
        return None
    try:
        content = await file.read()
    finally:
        await file.close()
    return build_document(content, file.filename)
