# utils/uploads.py
import shutil
import uuid
from pathlib import Path
from typing import Optional

from fastapi import HTTPException, UploadFile

from config import settings

UPLOAD_DIR = Path(settings.UPLOAD_DIR)
PUBLIC_PREFIX = "/uploads"

# Images and videos only
ALLOWED_EXTENSIONS = {"jpeg", "jpg", "png", "gif", "webp", "mp4", "mov", "avi", "webm"}
ALLOWED_CONTENT_PREFIXES = ("image/", "video/")


def _extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def save_upload(file: Optional[UploadFile]) -> Optional[str]:
    """Store an uploaded file under UPLOAD_DIR and return its public URL.

    Returns None when no file was sent.
    """
    if file is None or not file.filename:
        return None

    ext = _extension(file.filename)
    content_type = file.content_type or ""
    if ext not in ALLOWED_EXTENSIONS or not content_type.startswith(ALLOWED_CONTENT_PREFIXES):
        raise HTTPException(status_code=400, detail="Only images and videos are allowed")

    max_bytes = settings.MAX_UPLOAD_MB * 1024 * 1024
    if file.size is not None and file.size > max_bytes:
        raise HTTPException(status_code=400, detail="File too large")

    UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    unique_filename = f"{uuid.uuid4()}.{ext}"
    save_path = UPLOAD_DIR / unique_filename
    try:
        with open(save_path, "wb") as buffer:
            shutil.copyfileobj(file.file, buffer)
    finally:
        file.file.close()

    return f"{PUBLIC_PREFIX}/{unique_filename}"
