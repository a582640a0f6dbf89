# wallpaper_switch/core/downloader.py
import io
import logging
import uuid
from pathlib import Path
from urllib.parse import urlparse

from PIL import Image  # Using Pillow for validation

from . import http
from .errors import InvalidImageError, StorageError

logger = logging.getLogger(__name__)

PICTURE_FILE_PREFIX = "background"
ALLOWED_FORMATS = ('JPEG', 'PNG', 'GIF', 'WEBP', 'BMP')
DOWNLOAD_TIMEOUT = 60  # seconds, images are larger than pages


def new_picture_path(data_dir: Path, image_url: str) -> Path:
    """
    Returns a fresh path for a downloaded picture, e.g.
    background-1b4e28ba-2fa1-11d2-883f-0016d3cca427.jpg. The random token keeps
    the file apart from the picture that is still in use.
    """
    extension = Path(urlparse(image_url).path).suffix
    return Path(data_dir) / f"{PICTURE_FILE_PREFIX}-{uuid.uuid4()}{extension}"


def _validate_image(image_bytes: bytes, url: str) -> str:
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            img.verify()  # Verify image data integrity
            image_format = img.format
    except (OSError, SyntaxError, Image.UnidentifiedImageError, Image.DecompressionBombError) as img_err:
        logger.error(f"Downloaded content from {url} is not a valid image or is corrupted: {img_err}")
        raise InvalidImageError(f"Content from {url} is not a valid image: {img_err}") from img_err

    if image_format not in ALLOWED_FORMATS:
        logger.error(f"Downloaded image format {image_format} from {url} is not supported")
        raise InvalidImageError(f"Unsupported image format {image_format} from {url}")
    return image_format


def download_image(url: str, save_path: Path, timeout: float = DOWNLOAD_TIMEOUT) -> Path:
    """
    Downloads an image from a URL and saves it to the specified path.
    The content is validated with Pillow before anything is written.

    Args:
        url (str): The URL of the image to download.
        save_path (Path): The full path (including filename) to save to.
        timeout (float): Network timeout in seconds.

    Returns:
        Path: save_path, once the file is fully written.

    Raises:
        NetworkError: If the download fails.
        InvalidImageError: If the content is empty or not a supported image.
        StorageError: If the file cannot be written.
    """
    logger.info(f"Downloading image from {url} to {save_path}")
    save_path = Path(save_path)

    response = http.get(url, timeout=timeout, stream=True)

    content_type = response.headers.get('content-type', '').lower()
    if not content_type.startswith('image/'):
        logger.warning(f"URL {url} did not return an image content-type (got: {content_type}). Proceeding with validation.")

    image_bytes = response.content
    if not image_bytes:
        logger.error(f"Downloaded zero bytes from {url}")
        raise InvalidImageError(f"Downloaded zero bytes from {url}")

    image_format = _validate_image(image_bytes, url)
    logger.info(f"Image validated successfully (Format: {image_format})")

    try:
        with open(save_path, 'wb') as f:
            f.write(image_bytes)
    except OSError as e:
        logger.error(f"Error saving image to {save_path}: {e}")
        save_path.unlink(missing_ok=True)
        raise StorageError(f"Cannot write picture {save_path}: {e}") from e

    logger.info(f"Successfully downloaded and saved image to {save_path}")
    return save_path
