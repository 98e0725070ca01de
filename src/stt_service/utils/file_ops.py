import re
import tempfile
from pathlib import Path
from typing import Optional
from stt_service.core.logging import logger

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
MAX_FILENAME_LENGTH = 64


def get_project_root() -> Path:
    """
    Find the project root directory by searching for pyproject.toml.

    Searches upwards from the current file's directory until pyproject.toml is found.

    Returns:
        Path to the project root directory

    Raises:
        FileNotFoundError: If pyproject.toml is not found in any parent directory
    """
    current_dir = Path(__file__).resolve().parent

    for directory in [current_dir, *current_dir.parents]:
        if (directory / "pyproject.toml").exists():
            return directory

    raise FileNotFoundError(
        "Could not find project root (pyproject.toml not found)."
    )


def safe_filename(filename: Optional[str]) -> str:
    """
    Reduce a client-supplied filename to a string safe for a temp file suffix.

    Directory components are dropped and anything outside [A-Za-z0-9._-]
    collapses to "_".

    Args:
        filename: Original upload filename, may be None

    Returns:
        Sanitized basename, "audio" when nothing usable remains
    """
    if not filename:
        return "audio"

    name = Path(filename.replace("\\", "/")).name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    if not name:
        return "audio"
    return name[-MAX_FILENAME_LENGTH:]


def remove_file(path: Optional[Path]) -> None:
    """
    Delete a file if it exists.

    Safe to call repeatedly on the same path. Failures are logged, not raised,
    so cleanup never masks the error that triggered it.

    Args:
        path: File to delete, None is ignored
    """
    if path is None:
        return

    try:
        path.unlink(missing_ok=True)
        logger.debug(f"Cleaned up temporary file: {path}")
    except OSError as e:
        logger.warning(f"Could not remove temporary file {path}: {e}")


def reserve_temp_path(
    prefix: str = "tmp-",
    suffix: str = ".tmp",
    directory: Optional[Path] = None,
) -> Path:
    """
    Create an empty, uniquely named temp file and return its path.

    The caller owns the file and must remove it.
    """
    with tempfile.NamedTemporaryFile(
        prefix=prefix, suffix=suffix, dir=directory, delete=False
    ) as temp_file:
        return Path(temp_file.name)


def write_temp_file(
    data: bytes,
    prefix: str = "tmp-",
    suffix: str = ".tmp",
    directory: Optional[Path] = None,
) -> Path:
    """
    Write data to a new, uniquely named temp file.

    Args:
        data: Bytes to write
        prefix: File name prefix
        suffix: File suffix/extension
        directory: Parent directory (system temp dir when None)

    Returns:
        Path of the written file. The caller owns it and must remove it.

    Raises:
        OSError: If the file cannot be created or written. A partially
            written file is removed before raising.
    """
    temp_file = tempfile.NamedTemporaryFile(
        prefix=prefix, suffix=suffix, dir=directory, delete=False
    )
    path = Path(temp_file.name)
    try:
        with temp_file:
            temp_file.write(data)
    except OSError:
        remove_file(path)
        raise
    return path
