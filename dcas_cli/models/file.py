import json
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Dict, List, Optional


class FileInfo(BaseModel):
    """A local file to upload. The ID is set once the upload succeeds."""
    name: str
    content_type: str
    content: bytes = b""
    id: Optional[str] = None


class FileUploadRequest(BaseModel):
    """Model for the DCAS upload request body."""
    model_config = ConfigDict(populate_by_name=True)

    content_type: str = Field(..., alias="ContentType")
    content: str = Field(..., alias="Content")  # Base64 encoded content


class UploadResult(BaseModel):
    """Model for one entry of the upload command output."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="Name")
    id: Optional[str] = Field(None, alias="ID")
    content_type: str = Field(..., alias="ContentType")

    @classmethod
    def from_file(cls, file_info: FileInfo) -> "UploadResult":
        return cls(name=file_info.name, id=file_info.id, content_type=file_info.content_type)


class FileIndex(BaseModel):
    """Mapping of logical file names to DCAS IDs under a base path."""
    model_config = ConfigDict(populate_by_name=True)

    base_path: str = Field(..., alias="basePath")
    mappings: Optional[Dict[str, str]] = Field(default_factory=dict)

    @field_validator("mappings", mode="before")
    @classmethod
    def empty_mappings(cls, v):
        # Some index documents carry "mappings": null before the first file is added
        return {} if v is None else v


class FileIndexDoc(BaseModel):
    """Model for the file index Sidetree document."""
    model_config = ConfigDict(populate_by_name=True)

    file_index: FileIndex = Field(..., alias="fileIndex")


def results_to_json(files: List[FileInfo]) -> str:
    """
    Render files as the indented JSON array printed by the CLI.
    """
    entries = [UploadResult.from_file(f).model_dump(by_alias=True) for f in files]
    return json.dumps(entries, indent=2)
