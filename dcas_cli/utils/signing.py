"""
EC signing key loading and ES256 JWS creation for signed index updates.
"""
from typing import Any, Dict

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from dcas_cli.config.logging_config import logger
from dcas_cli.utils.exceptions import FileReadError, SigningKeyError

SIGNING_ALGORITHM = "ES256"
UPDATE_KEY_ID = "update-key"


class ECSigner:
    """Signs JSON payloads with an EC P-256 private key as a compact ES256 JWS."""

    def __init__(self, private_key: ec.EllipticCurvePrivateKey, algorithm: str = SIGNING_ALGORITHM,
                 key_id: str = UPDATE_KEY_ID):
        self.private_key = private_key
        self.algorithm = algorithm
        self.key_id = key_id

    def sign(self, payload: Dict[str, Any]) -> str:
        """
        Create a compact JWS over a JSON payload.

        Args:
            payload: The JSON-serializable payload

        Returns:
            The compact serialization: header.payload.signature
        """
        # Protected header is {"alg", "kid"}; no "typ"
        return jwt.encode(
            payload,
            self.private_key,
            algorithm=self.algorithm,
            headers={"kid": self.key_id, "typ": None}
        )


def private_key_from_pem(private_key_pem: bytes) -> ec.EllipticCurvePrivateKey:
    """
    Parse a PEM encoded EC private key (SEC1 or PKCS#8) on the P-256 curve.

    Raises:
        SigningKeyError: If no private key is found or the key is not a P-256 EC key
    """
    if b"-----BEGIN" not in private_key_pem or b"PRIVATE KEY-----" not in private_key_pem:
        raise SigningKeyError("private key not found in PEM")

    try:
        private_key = serialization.load_pem_private_key(private_key_pem, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SigningKeyError(f"invalid private key PEM: {e}") from e

    if not isinstance(private_key, ec.EllipticCurvePrivateKey):
        raise SigningKeyError("private key is not an EC key")

    if not isinstance(private_key.curve, ec.SECP256R1):
        raise SigningKeyError(f"unsupported curve [{private_key.curve.name}], P-256 required for {SIGNING_ALGORITHM}")

    return private_key


def private_key_from_file(path: str) -> ec.EllipticCurvePrivateKey:
    """
    Read and parse a PEM encoded EC private key from a file.
    """
    logger.debug(f"Loading signing key from {path}")
    try:
        with open(path, "rb") as f:
            key_bytes = f.read()
    except OSError as e:
        raise FileReadError(path, e) from e

    return private_key_from_pem(key_bytes)
