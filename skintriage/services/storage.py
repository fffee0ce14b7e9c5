# skintriage/services/storage.py

from typing import Optional
from urllib.parse import unquote, urlsplit

from skintriage.core.config import settings

STORAGE_OBJECT_PATH = "/storage/v1/object/"
# signed URLs, public bucket URLs and authenticated downloads
OBJECT_ACCESS_MODES = ("sign", "public", "authenticated")


def _origin(url: str) -> tuple:
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    port = parts.port or (443 if scheme == "https" else 80 if scheme == "http" else None)
    return scheme, (parts.hostname or "").lower(), port


def is_authorized_image_reference(
    image_url: str,
    user_id: Optional[str],
    storage_url: Optional[str] = None,
    bucket: Optional[str] = None,
    enforce_owner_folder: Optional[bool] = None,
) -> bool:
    """
    True if `image_url` points at an object in the deployment's own storage
    bucket (and, when enforced, inside the caller's `{user_id}/` folder).
    Anything else would make the model provider fetch an arbitrary URL.
    """
    storage_url = storage_url or settings.storage_url
    bucket = bucket or settings.STORAGE_BUCKET
    if enforce_owner_folder is None:
        enforce_owner_folder = settings.STORAGE_ENFORCE_OWNER_FOLDER

    try:
        parts = urlsplit(image_url.strip())
        if parts.username or parts.password:
            return False
        if _origin(image_url.strip()) != _origin(storage_url):
            return False
    except ValueError:
        # urlsplit raises on malformed ports and brackets
        return False
    if parts.scheme.lower() not in ("http", "https"):
        return False

    path = unquote(parts.path)
    if not path.startswith(STORAGE_OBJECT_PATH):
        return False
    segments = path[len(STORAGE_OBJECT_PATH):].split("/")
    if any(segment in ("", ".", "..") for segment in segments):
        return False
    # <mode>/<bucket>/<object path...>
    if len(segments) < 3 or segments[0] not in OBJECT_ACCESS_MODES or segments[1] != bucket:
        return False
    if enforce_owner_folder:
        # Objects live at {user_id}/{file}; the folder must be the caller's
        return len(segments) >= 4 and segments[2] == user_id
    return True
