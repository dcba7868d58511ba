from lcl_quote.schemas.quote import CamelModel


class AttachmentUploadResponse(CamelModel):
    name: str
    stored_name: str
    content_type: str
    size: int
