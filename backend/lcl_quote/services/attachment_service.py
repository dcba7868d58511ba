import os
import uuid

import aiofiles


async def save_attachment(content: bytes, filename: str, upload_dir: str) -> tuple[str, str]:
    """Write an accepted attachment to disk.

    Returns (stored_filename, full_file_path). The stored name is random so two
    customers uploading "invoice.pdf" never collide.
    """
    ext = os.path.splitext(filename or "upload")[1].lower()
    stored_filename = f"{uuid.uuid4()}{ext}"
    file_path = os.path.join(upload_dir, stored_filename)

    os.makedirs(upload_dir, exist_ok=True)

    async with aiofiles.open(file_path, "wb") as f:
        await f.write(content)

    return stored_filename, file_path
