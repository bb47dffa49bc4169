# product_form/utils/images.py
import asyncio
import base64
import io
import logging
import mimetypes
import os
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# what the upload control's file picker offers (accept="image/*")
ACCEPT = "image/"


def _safe_ext(filename: str) -> str:
    _, ext = os.path.splitext(filename)
    return ext.lower()


def guess_mime(contents: bytes, filename: str = "") -> Optional[str]:
    """
    Guess the MIME type of `contents`. The file name wins when it maps to an
    image type; otherwise the bytes are sniffed with PIL.
    Returns None when the content is not an image.
    """
    mime, _ = mimetypes.guess_type(filename or "")
    if mime and mime.startswith(ACCEPT):
        return mime
    # svg is text, PIL cannot open it
    if _safe_ext(filename) == ".svg":
        return "image/svg+xml"
    try:
        im = Image.open(io.BytesIO(contents))
        fmt = im.format
    except (UnidentifiedImageError, OSError):
        return None
    if not fmt:
        return None
    return Image.MIME.get(fmt) or f"image/{fmt.lower()}"


def encode_data_url(contents: bytes, mime: str) -> str:
    """Same shape as a browser FileReader.readAsDataURL result."""
    b64 = base64.b64encode(contents).decode("ascii")
    return f"data:{mime};base64,{b64}"


def is_oversized(size: int, limit: int) -> bool:
    return limit > 0 and size > limit


def _read_file(path: Path) -> bytes:
    with open(path, "rb") as f:
        return f.read()


async def read_image_as_data_url(path: Union[str, Path, None], max_bytes: int = 0) -> Optional[str]:
    """
    Read a locally chosen file and return it as a data URL.
    - path None -> None (nothing chosen)
    - non-image content -> None, with a warning
    - larger than max_bytes -> still returned; the limit is advisory
    - unreadable file (e.g. removed after it was chosen) -> None, with a warning
    The read happens in a worker thread so the event loop keeps running.
    """
    if path is None:
        return None
    path = Path(path)
    try:
        contents = await asyncio.to_thread(_read_file, path)
    except OSError as exc:
        logger.warning("Could not read %s: %s", path.name, exc)
        return None

    mime = guess_mime(contents, path.name)
    if mime is None:
        logger.warning("Ignoring %s: not an image", path.name)
        return None
    if is_oversized(len(contents), max_bytes):
        logger.warning("Image %s is %d bytes (advisory limit %d); accepting anyway",
                       path.name, len(contents), max_bytes)
    return encode_data_url(contents, mime)
