"""
Builds and submits file index update requests.

The two Sidetree protocol variants differ only in how an update is
authenticated, so each is an UpdateAuthenticator:

- OTPAuthenticator: the current one-time password and the next one are
  base64url encoded into the request. No signature.
- SignatureAuthenticator: the next reveal value is committed to as a
  multihash and the delta hash is signed with the ES256 update key.
"""
import json
from abc import ABC, abstractmethod

from dcas_cli.config.logging_config import logger
from dcas_cli.config.settings import get_settings
from dcas_cli.models.update import DeltaModel, OTPUpdateRequest, PatchAction, SignedUpdateRequest
from dcas_cli.models.upload import ProtocolVariant, UploadConfig
from dcas_cli.utils.exceptions import MissingUniqueSuffixError, TransportError
from dcas_cli.utils.hashing import SHA2_256, canonicalize, encode_to_string, encoded_multihash
from dcas_cli.utils.patch_utils import parse_patch
from dcas_cli.utils.signing import ECSigner, private_key_from_file, private_key_from_pem

HTTP_OK = 200


def get_unique_suffix(file_index_url: str) -> str:
    """
    Extract the unique suffix from a file index URL: the text after the last ':'.

    Raises:
        MissingUniqueSuffixError: If the URL contains no ':'
    """
    pos = file_index_url.rfind(":")
    if pos == -1:
        raise MissingUniqueSuffixError(file_index_url)
    return file_index_url[pos + 1:]


class UpdateAuthenticator(ABC):
    """Turns a JSON patch into an authenticated update request."""

    protocol: ProtocolVariant

    def __init__(self, multihash_code: int = SHA2_256):
        self.multihash_code = multihash_code

    @abstractmethod
    def authenticate(self, unique_suffix: str, patch: str) -> bytes:
        """
        Build the update request for the document with the given unique suffix.

        Args:
            unique_suffix: Unique suffix of the file index document
            patch: JSON patch document as a string

        Returns:
            The JSON encoded update request
        """


class OTPAuthenticator(UpdateAuthenticator):
    protocol = ProtocolVariant.OTP

    def __init__(self, update_otp: str, next_update_otp: str, multihash_code: int = SHA2_256,
                 validate_patch: bool = True):
        super().__init__(multihash_code)
        self.update_otp = update_otp
        self.next_update_otp = next_update_otp
        self.validate_patch = validate_patch

    def _patch_data(self, patch: str) -> bytes:
        next_update_otp = encode_to_string(self.next_update_otp.encode("utf-8"))

        if self.validate_patch:
            return canonicalize({"nextUpdateOTP": next_update_otp, "patch": parse_patch(patch).to_list()})

        # Raw patch text is embedded as-is
        return ('{"nextUpdateOTP":' + json.dumps(next_update_otp) + ',"patch":' + patch + '}').encode("utf-8")

    def authenticate(self, unique_suffix: str, patch: str) -> bytes:
        request = OTPUpdateRequest(
            did_unique_suffix=unique_suffix,
            update_otp=encode_to_string(self.update_otp.encode("utf-8")),
            patch_data=encode_to_string(self._patch_data(patch)),
            multihash_code=self.multihash_code
        )
        return canonicalize(request.model_dump(by_alias=True))


class SignatureAuthenticator(UpdateAuthenticator):
    protocol = ProtocolVariant.SIGNED

    def __init__(self, update_reveal_value: str, next_update_reveal_value: str, signer: ECSigner,
                 multihash_code: int = SHA2_256):
        super().__init__(multihash_code)
        self.update_reveal_value = update_reveal_value
        self.next_update_reveal_value = next_update_reveal_value
        self.signer = signer

    def authenticate(self, unique_suffix: str, patch: str) -> bytes:
        update_patch = parse_patch(patch)

        delta = DeltaModel(
            update_commitment=encoded_multihash(self.next_update_reveal_value.encode("utf-8"), self.multihash_code),
            patches=[PatchAction(patches=update_patch.to_list())]
        )
        delta_bytes = canonicalize(delta.model_dump(by_alias=True))

        signed_data = self.signer.sign({"deltaHash": encoded_multihash(delta_bytes, self.multihash_code)})

        request = SignedUpdateRequest(
            did_unique_suffix=unique_suffix,
            update_reveal_value=encode_to_string(self.update_reveal_value.encode("utf-8")),
            delta=encode_to_string(delta_bytes),
            signed_data=signed_data
        )
        return canonicalize(request.model_dump(by_alias=True))


def new_authenticator(config: UploadConfig) -> UpdateAuthenticator:
    """
    Create the authenticator for the protocol variant of the configuration.

    For the signed variant the signing key is loaded here, so bad key
    material is reported before anything is uploaded.

    Raises:
        SigningKeyError: If the signing key is malformed
        FileReadError: If the signing key file cannot be read
    """
    if config.protocol == ProtocolVariant.OTP:
        return OTPAuthenticator(
            config.update_pwd,
            config.next_update_pwd,
            validate_patch=get_settings().VALIDATE_OTP_PATCH
        )

    if config.signing_key_file:
        private_key = private_key_from_file(config.signing_key_file)
    else:
        private_key = private_key_from_pem(config.signing_key.encode("utf-8"))

    return SignatureAuthenticator(config.update_pwd, config.next_update_pwd, ECSigner(private_key))


def build_update_request(file_index_url: str, patch: str, authenticator: UpdateAuthenticator) -> bytes:
    return authenticator.authenticate(get_unique_suffix(file_index_url), patch)


def submit_update(client, file_index_base_url: str, request: bytes) -> None:
    """
    Post an update request to the Sidetree endpoint of the file index document.

    Raises:
        TransportError: If the update is rejected
    """
    response = client.post(file_index_base_url, request)

    if response.status_code != HTTP_OK:
        raise TransportError(
            f"error updating file index document. Status code {response.status_code}: {response.error_msg}",
            status_code=response.status_code,
            server_message=response.error_msg
        )

    logger.info(f"File index document updated at [{file_index_base_url}]")
