from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List

OPERATION_TYPE_UPDATE = "update"
PATCH_ACTION_JSON = "ietf-json-patch"


class OTPUpdateRequest(BaseModel):
    """Model for an update request authenticated by a one-time password pair."""
    model_config = ConfigDict(populate_by_name=True)

    operation: str = Field(OPERATION_TYPE_UPDATE, alias="type")
    did_unique_suffix: str = Field(..., alias="didUniqueSuffix")
    update_otp: str = Field(..., alias="updateOTP")  # Base64url encoded
    patch_data: str = Field(..., alias="patchData")  # Base64url encoded patch data document
    multihash_code: int = Field(..., alias="multihashCode")


class PatchAction(BaseModel):
    """Model for a Sidetree patch wrapping a JSON patch."""
    action: str = PATCH_ACTION_JSON
    patches: List[Dict[str, Any]]


class DeltaModel(BaseModel):
    """Model for the delta of a signed update request."""
    model_config = ConfigDict(populate_by_name=True)

    update_commitment: str = Field(..., alias="updateCommitment")  # Encoded multihash of the next reveal value
    patches: List[PatchAction]


class SignedUpdateRequest(BaseModel):
    """Model for an update request signed with the update key."""
    model_config = ConfigDict(populate_by_name=True)

    operation: str = Field(OPERATION_TYPE_UPDATE, alias="type")
    did_unique_suffix: str = Field(..., alias="didUniqueSuffix")
    update_reveal_value: str = Field(..., alias="updateRevealValue")  # Base64url encoded
    delta: str  # Base64url encoded canonical delta
    signed_data: str = Field(..., alias="signedData")  # Compact JWS over the delta hash
