import os
import uuid
from typing import Iterable

from fastapi import UploadFile

from playpulse.config import settings
from playpulse.errors import ValidationError


def file_extension(filename: str | None) -> str:
    name = filename or ""
    return name.rsplit(".", 1)[-1].lower() if "." in name else ""


def validate_file(file: UploadFile, allowed_extensions: Iterable[str]) -> str:
    allowed = {ext.lower() for ext in allowed_extensions}
    ext = file_extension(file.filename)
    if ext not in allowed:
        raise ValidationError(
            f"File type '{ext}' not allowed. Allowed: {', '.join(sorted(allowed))}",
        )
    return ext


async def save_upload(
    file: UploadFile,
    subfolder: str = "",
    allowed_extensions: Iterable[str] | None = None,
    max_size: int | None = None,
) -> dict:
    ext = validate_file(file, allowed_extensions or settings.ALLOWED_IMAGE_EXTENSIONS)
    limit = max_size or settings.MAX_UPLOAD_SIZE
    content = await file.read()
    if len(content) > limit:
        raise ValidationError(f"File exceeds {limit // (1024 * 1024)} MB limit")

    folder = os.path.join(settings.UPLOAD_DIR, subfolder)
    os.makedirs(folder, exist_ok=True)

    filename = f"{uuid.uuid4().hex}.{ext}"
    path = os.path.join(folder, filename)

    with open(path, "wb") as f:
        f.write(content)

    return {
        "filename": file.filename,
        "url": f"/uploads/{subfolder}/{filename}".replace("\\", "/").replace("//", "/"),
        "size": len(content),
    }
