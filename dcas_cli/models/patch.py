from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator, model_validator
from typing import Any, Dict, List, Literal, Optional

# Operations that carry a "value" member (RFC 6902 section 4)
VALUE_OPS = ("add", "replace", "test")
# Operations that carry a "from" member
FROM_OPS = ("move", "copy")


class JsonPatchOperation(BaseModel):
    """Model for a single RFC 6902 JSON patch operation."""
    model_config = ConfigDict(populate_by_name=True)

    op: Literal["add", "remove", "replace", "move", "copy", "test"]
    path: str
    value: Optional[Any] = None
    from_: Optional[str] = Field(None, alias="from")

    @field_validator('path', 'from_')
    def validate_pointer(cls, v):
        """Validate that a path is a JSON pointer."""
        if v is not None and v != "" and not v.startswith("/"):
            raise ValueError(f"invalid JSON pointer [{v}]")
        return v

    @model_validator(mode='after')
    def validate_members(self):
        """Validate that the members required by the operation are present."""
        if self.op in VALUE_OPS and "value" not in self.model_fields_set:
            raise ValueError(f"'{self.op}' operation requires a value")
        if self.op in FROM_OPS and self.from_ is None:
            raise ValueError(f"'{self.op}' operation requires a from location")
        return self


class JsonPatch(RootModel[List[JsonPatchOperation]]):
    """Model for a JSON patch document: a non-empty list of operations."""
    root: List[JsonPatchOperation] = Field(..., min_length=1)

    def to_list(self) -> List[Dict[str, Any]]:
        return [op.model_dump(by_alias=True, exclude_unset=True) for op in self.root]
