# utils/logo.py

import base64
import logging
import mimetypes
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def to_data_url(data: bytes, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def read_logo(path: Path) -> Optional[bytes]:
    """
    Read the company logo. A missing or unreadable file is logged and
    treated as "no logo"; the form works without it.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        logger.error("Failed to load logo from %s: %s", path, e)
        return None

    if not data:
        logger.error("Logo file %s is empty", path)
        return None

    return data


def load_logo_data_url(path: Path, data: Optional[bytes] = None) -> Optional[str]:
    """
    Data URL for the logo, typed from the file extension.
    Pass `data` when the bytes were already read from `path`.
    """
    if data is None:
        data = read_logo(path)
    if data is None:
        return None
    mime = mimetypes.guess_type(str(path))[0] or "image/png"
    return to_data_url(data, mime)
