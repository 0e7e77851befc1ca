import base64
import json
from typing import List

from dcas_cli.config.logging_config import logger
from dcas_cli.models.file import FileInfo, FileUploadRequest
from dcas_cli.utils.exceptions import ProtocolError, TransportError

HTTP_OK = 200


def upload(client, url: str, content_type: str, content: bytes) -> str:
    """
    Upload content to DCAS.

    Args:
        client: HTTP client used to send the request
        url: The DCAS URL to which the content is added
        content_type: MIME type of the content
        content: Raw file bytes

    Returns:
        The DCAS ID of the content
    """
    request = FileUploadRequest(
        content_type=content_type,
        content=base64.b64encode(content).decode("utf-8")
    )

    response = client.post(url, request.model_dump_json(by_alias=True).encode("utf-8"))

    if response.status_code != HTTP_OK:
        raise TransportError(
            f"status code {response.status_code}: {response.error_msg}",
            status_code=response.status_code,
            server_message=response.error_msg
        )

    try:
        file_id = json.loads(response.payload)
    except ValueError as e:
        raise ProtocolError(f"invalid upload response from [{url}]: {e}") from e

    if not isinstance(file_id, str):
        raise ProtocolError(f"invalid upload response from [{url}]: expecting a string ID")

    return file_id


def upload_files(client, url: str, files: List[FileInfo]) -> List[FileInfo]:
    """
    Upload files one at a time, setting each file's ID in place.

    The first failure aborts the remaining uploads. Files uploaded before the
    failure stay in DCAS.
    """
    for i, file_info in enumerate(files):
        file_info.id = upload(client, url, file_info.content_type, file_info.content)
        logger.info(f"Uploaded {file_info.name} ({i + 1}/{len(files)}) - ID: {file_info.id}")

    return files
