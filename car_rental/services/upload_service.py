import logging
import os
import uuid

from flask import current_app

from ..exceptions import UploadError
from ..utils.constants import UPLOAD_URL_PREFIX

logger = logging.getLogger(__name__)


def allowed_extension(filename: str) -> bool:
    ext = os.path.splitext(filename or "")[1].lower().lstrip(".")
    return ext in current_app.config.get("ALLOWED_IMAGE_EXTENSIONS", set())


def save_upload(file, subdir: str, prefix: str = "") -> str:
    """
    Write an uploaded image under ``UPLOAD_ROOT/<subdir>`` with a random name
    (``<prefix><hex><ext>``) and return its public URL.
    """
    if file is None or not file.filename:
        raise UploadError("No file uploaded")
    if not allowed_extension(file.filename):
        raise UploadError("Only image files (png, jpg, jpeg, gif, webp) are allowed")

    ext = os.path.splitext(file.filename)[1].lower()
    name = f"{prefix}{uuid.uuid4().hex[:12]}{ext}"
    target_dir = os.path.join(current_app.config["UPLOAD_ROOT"], subdir)
    os.makedirs(target_dir, exist_ok=True)
    full_path = os.path.join(target_dir, name)

    file.save(full_path)
    if os.path.getsize(full_path) == 0:
        os.remove(full_path)
        raise UploadError("No file uploaded")

    logger.info("Saved upload %s", full_path)
    return f"{UPLOAD_URL_PREFIX}{subdir}/{name}"
