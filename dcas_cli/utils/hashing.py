import base64
import hashlib
import json
from typing import Any

from dcas_cli.utils.exceptions import ProtocolError

# Multihash code for sha2-256
SHA2_256 = 18

_HASH_FUNCTIONS = {
    SHA2_256: hashlib.sha256,
}


def encode_to_string(data: bytes) -> str:
    """Base64url encode with padding, as used for Sidetree request fields."""
    return base64.urlsafe_b64encode(data).decode("ascii")


def compute_multihash(data: bytes, multihash_code: int = SHA2_256) -> bytes:
    """
    Compute the multihash of data: <code><digest length><digest>.

    Args:
        data: Bytes to hash
        multihash_code: Multihash algorithm code

    Returns:
        The multihash bytes
    """
    hash_function = _HASH_FUNCTIONS.get(multihash_code)
    if hash_function is None:
        raise ProtocolError(f"algorithm not supported, unable to compute hash [{multihash_code}]")

    digest = hash_function(data).digest()
    return bytes([multihash_code, len(digest)]) + digest


def encoded_multihash(data: bytes, multihash_code: int = SHA2_256) -> str:
    return encode_to_string(compute_multihash(data, multihash_code))


def canonicalize(obj: Any) -> bytes:
    """Serialize obj as canonical JSON (sorted keys, no insignificant whitespace)."""
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
