import json
from typing import List

from pydantic import ValidationError as PydanticValidationError

from dcas_cli.models.file import FileIndex, FileInfo
from dcas_cli.models.patch import JsonPatch, JsonPatchOperation
from dcas_cli.utils.exceptions import InvalidPatchError

JSON_PATCH_BASE_PATH = "/fileIndex/mappings/"
JSON_PATCH_ADD_OP = "add"
JSON_PATCH_REPLACE_OP = "replace"


def get_update_patch(file_index: FileIndex, files: List[FileInfo]) -> str:
    """
    Build the JSON patch that maps each uploaded file to its DCAS ID.

    A file already present in the index mappings gets a 'replace' operation,
    any other file an 'add' operation. Operations follow the order of files.

    Args:
        file_index: The file index fetched before the upload
        files: The uploaded files, with IDs set

    Returns:
        The JSON patch document as a string
    """
    operations = []
    for f in files:
        op = JSON_PATCH_REPLACE_OP if f.name in file_index.mappings else JSON_PATCH_ADD_OP
        operations.append(JsonPatchOperation(op=op, path=JSON_PATCH_BASE_PATH + f.name, value=f.id))

    return json.dumps(JsonPatch(operations).to_list(), separators=(",", ":"), ensure_ascii=False)


def parse_patch(patch: str) -> JsonPatch:
    """
    Decode and validate a JSON patch document.

    Raises:
        InvalidPatchError: If the patch is not valid JSON or not a valid RFC 6902 document
    """
    try:
        return JsonPatch.model_validate_json(patch)
    except PydanticValidationError as e:
        raise InvalidPatchError(f"invalid JSON patch: {e}") from e
