from pydantic import ValidationError as PydanticValidationError

from dcas_cli.config.logging_config import logger
from dcas_cli.models.file import FileIndex, FileIndexDoc
from dcas_cli.utils.exceptions import BasePathMismatchError, FileIndexNotFoundError, ProtocolError, TransportError

HTTP_OK = 200
HTTP_NOT_FOUND = 404


def get_file_index(client, file_index_url: str, base_path: str) -> FileIndex:
    """
    Retrieve the file index document and validate its base path.

    Args:
        client: HTTP client used to send the request
        file_index_url: URL of the file index Sidetree document
        base_path: Path component of the DCAS upload URL

    Returns:
        The file index of the document

    Raises:
        FileIndexNotFoundError: If the document does not exist
        TransportError: On any other non-200 response
        ProtocolError: If the document is malformed
        BasePathMismatchError: If the document is for another base path
    """
    response = client.get(file_index_url)

    if response.status_code != HTTP_OK:
        if response.status_code == HTTP_NOT_FOUND:
            raise FileIndexNotFoundError(file_index_url)

        raise TransportError(
            f"error retrieving file index document [{file_index_url}] status code {response.status_code}: {response.error_msg}",
            status_code=response.status_code,
            server_message=response.error_msg
        )

    try:
        file_index_doc = FileIndexDoc.model_validate_json(response.payload)
    except PydanticValidationError as e:
        raise ProtocolError(f"invalid file index document [{file_index_url}]: {e}") from e

    file_index = file_index_doc.file_index

    # Validate that the base path is correct
    if file_index.base_path != base_path:
        raise BasePathMismatchError(file_index.base_path, base_path)

    logger.info(f"Retrieved file index [{file_index_url}] with {len(file_index.mappings)} mappings")
    return file_index
