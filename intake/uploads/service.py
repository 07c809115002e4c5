"""
Upload orchestration.

Two entry points share UploadSchema and FileReceiver:

- ``upload``: the file is mandatory, ``comments`` is optional, and a
  missing-field response names the complete required set.
- ``submit_document``: ``comments`` is mandatory, the file is optional,
  and the response lists one message per violated field.

Both run after the auth gate and receive its RequestContext.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..core.request_context import RequestContext
from ..utils.exceptions import FileMissingError, ValidationFailedError
from ..utils.logger import get_logger
from .receiver import FileReceiver, IncomingFile
from .schema import UploadSchema

logger = get_logger(__name__)

INVALID_SELECTION = "Invalid selection."


class UploadService:
    def __init__(self, receiver: FileReceiver, enforce_options: bool = False):
        self.receiver = receiver
        self.upload_schema = UploadSchema(require_comments=False, enforce_options=enforce_options)
        self.document_schema = UploadSchema(require_comments=True, enforce_options=enforce_options)

    def upload(
        self,
        ctx: RequestContext,
        fields: Mapping[str, Any],
        incoming: Optional[IncomingFile],
    ) -> Dict[str, Any]:
        """Store a file with its metadata. The file is checked first, then the fields."""
        if incoming is None or not incoming.filename:
            raise FileMissingError()

        try:
            submission = self.upload_schema.validate(fields)
        except ValidationFailedError as e:
            logger.info("Upload rejected", subject=ctx.subject, missing=e.missing)
            if not e.missing:
                raise ValidationFailedError(e.errors, message=INVALID_SELECTION) from e
            raise ValidationFailedError(
                e.errors, missing=e.missing, message=self.upload_schema.missing_summary()
            ) from e

        stored = self.receiver.save(incoming)
        data = submission.to_wire(include_comments=submission.comments is not None)
        data["uploadedBy"] = ctx.subject
        data["file"] = stored.describe()
        logger.info("Upload accepted", subject=ctx.subject, filename=stored.generated_name)
        return {"message": "File uploaded successfully.", "data": data}

    def submit_document(
        self,
        ctx: RequestContext,
        fields: Mapping[str, Any],
        incoming: Optional[IncomingFile],
    ) -> Dict[str, Any]:
        """Validate the full document form; store the file if one was attached."""
        try:
            submission = self.document_schema.validate(fields)
        except ValidationFailedError as e:
            logger.info("Document rejected", subject=ctx.subject, errors=len(e.errors))
            raise

        stored = None
        if incoming is not None and incoming.filename:
            stored = self.receiver.save(incoming)

        data: Dict[str, Any] = {"selectedOption": submission.selected_option}
        data.update(submission.to_wire())
        data["uploadedBy"] = ctx.subject
        data["file"] = stored.generated_name if stored else None
        logger.info(
            "Document accepted",
            subject=ctx.subject,
            filename=stored.generated_name if stored else None,
        )
        return {"message": "Document uploaded successfully", "data": data}
