"""
Exception hierarchy for the DCAS upload client.

Every error raised by the services derives from DCASError so the CLI can
report it with a single handler. UserAborted is not a failure: it signals a
declined confirmation prompt.
"""
from typing import Optional


class DCASError(Exception):
    """Base class for all client errors."""


class ValidationError(DCASError):
    """Missing or malformed required input (URL, files, passwords, signing key)."""


class ContentTypeError(DCASError):
    """The content type of a file cannot be deduced from its name."""


class NoFileExtensionError(ContentTypeError):
    def __init__(self, file_name: str):
        super().__init__(f"content type cannot be deduced since no file extension provided [{file_name}]")
        self.file_name = file_name


class UnknownExtensionError(ContentTypeError):
    def __init__(self, file_name: str, extension: str):
        super().__init__(f"content type cannot be deduced from extension [{extension}] of file [{file_name}]")
        self.file_name = file_name
        self.extension = extension


class FileReadError(DCASError):
    """A local file (content or key file) could not be read."""

    def __init__(self, path: str, cause: OSError):
        super().__init__(f"error reading file [{path}]: {cause}")
        self.path = path


class TransportError(DCASError):
    """
    Non-200 HTTP response or network failure.

    status_code is None when no response was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, server_message: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message


class ProtocolError(DCASError):
    """The file index document or update protocol inputs are invalid."""


class FileIndexNotFoundError(ProtocolError):
    def __init__(self, url: str):
        super().__init__(f"file index document [{url}] not found")
        self.url = url


class BasePathMismatchError(ProtocolError):
    def __init__(self, index_base_path: str, base_path: str):
        super().__init__(
            f"base path of file index doc does not match the base path of the file: "
            f"[{index_base_path}] != [{base_path}]"
        )
        self.index_base_path = index_base_path
        self.base_path = base_path


class MissingUniqueSuffixError(ProtocolError):
    def __init__(self, url: str):
        super().__init__(f"unique suffix not provided in URL [{url}]")
        self.url = url


class InvalidPatchError(ProtocolError):
    """The JSON patch is not a well-formed RFC 6902 document."""


class SigningKeyError(ProtocolError):
    """The signing key material is missing, malformed or of the wrong type."""


class UserAborted(DCASError):
    """The user declined the upload at the confirmation prompt."""

    def __init__(self, message: str = "Operation aborted"):
        super().__init__(message)
