import mimetypes
import os
from typing import List

from dcas_cli.config.logging_config import logger
from dcas_cli.models.file import FileInfo
from dcas_cli.utils.exceptions import FileReadError, NoFileExtensionError, UnknownExtensionError, ValidationError

FILE_SEPARATOR = ";"


def split_file_paths(files: str) -> List[str]:
    """
    Split a semicolon separated list of paths, skipping empty entries.
    """
    paths = [p.strip() for p in files.split(FILE_SEPARATOR) if p.strip()]
    if not paths:
        raise ValidationError("files (--files) is required")
    return paths


def file_name_from_path(path: str) -> str:
    pos = path.rfind("/")
    if pos == -1:
        return path
    return path[pos + 1:]


def content_type_from_file_name(file_name: str) -> str:
    """
    Deduce the MIME type of a file from its extension.

    Args:
        file_name: Name of the file

    Returns:
        The content type

    Raises:
        NoFileExtensionError: If the name has no extension
        UnknownExtensionError: If the extension maps to no known MIME type
    """
    pos = file_name.rfind(".")
    if pos == -1:
        raise NoFileExtensionError(file_name)

    extension = file_name[pos:]
    content_type, _ = mimetypes.guess_type("x" + extension, strict=False)
    if not content_type:
        raise UnknownExtensionError(file_name, extension)

    return content_type


def describe_file(path: str) -> FileInfo:
    """
    Build a FileInfo with name and content type only. No file I/O is done.
    """
    file_name = file_name_from_path(path)
    return FileInfo(name=file_name, content_type=content_type_from_file_name(file_name))


def load_file(path: str) -> FileInfo:
    """
    Build a FileInfo for path and read its content.

    Raises:
        ContentTypeError: If the content type cannot be deduced
        FileReadError: If the file cannot be read
    """
    file_info = describe_file(path)

    try:
        with open(os.path.normpath(path), "rb") as f:
            file_info.content = f.read()
    except OSError as e:
        raise FileReadError(path, e) from e

    logger.debug(f"Loaded {file_info.name} ({file_info.content_type}, {len(file_info.content)} bytes)")
    return file_info

