import os
import shutil
import uuid
from typing import Optional

from fastapi import UploadFile

from tutoring_backend.config import settings
from tutoring_backend.logger import logger


def save_upload(upload: Optional[UploadFile]) -> Optional[str]:
    """
    Copy an uploaded file part into UPLOAD_DIR under a random name.
    Returns the stored path, or None when the part was not sent.
    """
    if upload is None or not upload.filename:
        return None

    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    path = os.path.join(settings.UPLOAD_DIR, uuid.uuid4().hex)
    with open(path, "wb") as out:
        shutil.copyfileobj(upload.file, out)

    logger.info(f"Stored upload '{upload.filename}' at {path}")
    return path
