"""
FastAPI routes for document uploads.

Both upload endpoints require ``Authorization: Bearer <token>`` and a
multipart body; the single binary part must be sent under ``file``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile

from intake.core.request_context import RequestContext
from intake.uploads.receiver import FILE_FIELD, IncomingFile
from intake.uploads.schema import MULTI_FIELDS, field_descriptors
from intake.uploads.service import UploadService
from intake.utils.exceptions import ValidationFailedError
from .auth_middleware import require_token


router = APIRouter(prefix="/api", tags=["uploads"])

SINGLE_FILE_ONLY = "Only one file may be uploaded."


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.uploads


def _split_form(form: FormData) -> Tuple[Dict[str, Any], Optional[IncomingFile]]:
    """Separate text fields from the file part."""
    fields: Dict[str, Any] = {}
    files: List[UploadFile] = []

    for key in dict.fromkeys(form.keys()):
        values = form.getlist(key)
        uploads = [v for v in values if isinstance(v, UploadFile)]
        texts = [v for v in values if isinstance(v, str)]
        if uploads and key != FILE_FIELD:
            message = f"Unexpected file field: {key}"
            raise ValidationFailedError([message], message=message)
        files.extend(uploads)
        if key in MULTI_FIELDS:
            fields[key] = texts
        elif texts:
            fields[key] = texts[-1]

    # An empty file input still submits a part with no filename
    files = [f for f in files if f.filename]
    if len(files) > 1:
        raise ValidationFailedError([SINGLE_FILE_ONLY], message=SINGLE_FILE_ONLY)
    if not files:
        return fields, None
    part = files[0]
    return fields, IncomingFile(filename=part.filename, content_type=part.content_type, stream=part.file)


@router.post("/upload")
async def upload_file(
    request: Request,
    ctx: RequestContext = Depends(require_token),
    uploads: UploadService = Depends(get_upload_service),
) -> Dict[str, Any]:
    """
    Upload one file with its metadata.

    Required fields: subject, description, tags, folder, approver,
    selectedGroups, selectedUsers (comments optional).

    Example:
        curl -X POST http://localhost:3000/api/upload \\
          -H "Authorization: Bearer $TOKEN" \\
          -F "subject=Q3 report" -F "description=Quarterly numbers" \\
          -F "tags=#finance" -F "folder=folder1" -F "approver=user1" \\
          -F "selectedGroups=group1" -F "selectedUsers=user2" \\
          -F "file=@report.pdf"
    """
    async with request.form() as form:
        fields, incoming = _split_form(form)
        return await run_in_threadpool(uploads.upload, ctx, fields, incoming)


@router.post("/documents")
async def submit_document(
    request: Request,
    ctx: RequestContext = Depends(require_token),
    uploads: UploadService = Depends(get_upload_service),
) -> Dict[str, Any]:
    """
    Submit the full document form (comments required, file optional).

    On validation failure the response lists one message per invalid field:
        { "error": ["Subject is required", "Comments are required", ...] }
    """
    async with request.form() as form:
        fields, incoming = _split_form(form)
        return await run_in_threadpool(uploads.submit_document, ctx, fields, incoming)


@router.get("/document-fields")
async def document_fields() -> List[Dict[str, Any]]:
    """Field descriptors the upload form is rendered from."""
    return field_descriptors()
