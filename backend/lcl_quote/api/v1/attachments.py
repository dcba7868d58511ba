import logging

from fastapi import APIRouter, Header, HTTPException, UploadFile

from lcl_quote.config import settings
from lcl_quote.i18n import resolve_locale
from lcl_quote.schemas.attachment import AttachmentUploadResponse
from lcl_quote.services.attachment_service import save_attachment
from lcl_quote.validation.validator import get_mime_type, validate_attachment

logger = logging.getLogger("lcl.api.attachments")

router = APIRouter()


@router.post("", response_model=AttachmentUploadResponse, status_code=201)
async def upload_attachment(
    file: UploadFile,
    locale: str | None = None,
    accept_language: str | None = Header(None),
) -> AttachmentUploadResponse:
    """Accept one file picked on the form.

    The type and size rules run here, when the file is selected, so a file
    that would fail them never gets into a submission.
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    content = await file.read()
    error = validate_attachment(
        file.filename,
        file.content_type,
        len(content),
        locale=resolve_locale(locale or accept_language, settings.default_locale),
        allowed_types=settings.allowed_attachment_types,
        max_bytes=settings.max_attachment_size_mb * 1024 * 1024,
    )
    if error:
        raise HTTPException(status_code=400, detail=error)

    stored_name, _ = await save_attachment(content, file.filename, settings.upload_dir)
    logger.info("Attachment %s stored as %s (%d bytes)", file.filename, stored_name, len(content))

    return AttachmentUploadResponse(
        name=file.filename,
        stored_name=stored_name,
        content_type=file.content_type or get_mime_type(file.filename),
        size=len(content),
    )
