import logging
import time
from pathlib import Path
from typing import Optional
from app.config import settings
from app.exceptions import FileStorageError

logger = logging.getLogger(__name__)


def get_file_extension(file_name: Optional[str]) -> str:
    if not file_name:
        return ""
    _, dot, extension = file_name.rpartition(".")
    if not dot:
        return ""
    return extension.lower()


def save_file(content: bytes, original_filename: Optional[str], user_id: int,
              root: Optional[str] = None) -> str:
    """Store an upload under <root>/users/<user_id>/<epoch-millis>.<ext> and return its path."""
    target_folder = Path(root or settings.file_upload_path) / "users" / str(user_id)
    try:
        target_folder.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"Failed to create the target folder: {target_folder}")
        raise FileStorageError(f"Failed to create the target folder: {e}")

    extension = get_file_extension(original_filename)
    stamp = int(time.time() * 1000)
    while True:
        target_path = target_folder / (f"{stamp}.{extension}" if extension else str(stamp))
        try:
            # "x" refuses to overwrite a file written in the same millisecond
            with open(target_path, "xb") as target:
                target.write(content)
            break
        except FileExistsError:
            stamp += 1
        except OSError as e:
            logger.error(f"File was not saved: {e}", exc_info=True)
            raise FileStorageError(f"File was not saved: {e}")

    logger.info(f"File saved to: {target_path}")
    return str(target_path)


def read_file(file_path: Optional[str]) -> Optional[bytes]:
    """Return the bytes stored at file_path, or None when it is blank or missing."""
    if not file_path or not file_path.strip():
        return None
    try:
        return Path(file_path).read_bytes()
    except OSError:
        logger.warning(f"No file found in the path {file_path}")
        return None
