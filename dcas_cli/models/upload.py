from enum import Enum
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict

from dcas_cli.utils.exceptions import ValidationError


class ProtocolVariant(str, Enum):
    OTP = "otp"          # Updates authenticated by a shared one-time password pair
    SIGNED = "signed"    # Updates signed with the ES256 update key


class UploadConfig(BaseModel):
    """
    Validated, immutable configuration of one upload run.

    Use from_args() to build it; it performs all argument validation and
    derives the base path and the file index base URL.
    """
    model_config = ConfigDict(frozen=True)

    protocol: ProtocolVariant
    files: str
    url: str
    base_path: str
    file_index_url: str
    file_index_base_url: str
    update_pwd: str
    next_update_pwd: str
    signing_key: Optional[str] = None
    signing_key_file: Optional[str] = None
    no_prompt: bool = False

    @classmethod
    def from_args(
        cls,
        protocol: ProtocolVariant,
        files: Optional[str],
        url: Optional[str],
        file_index_url: Optional[str],
        update_pwd: Optional[str],
        next_update_pwd: Optional[str],
        signing_key: Optional[str] = None,
        signing_key_file: Optional[str] = None,
        no_prompt: bool = False
    ) -> "UploadConfig":
        """
        Validate command arguments and build the configuration.

        Raises:
            ValidationError: If a required argument is missing or malformed
        """
        if not url:
            raise ValidationError("URL (--url) is required")

        try:
            parsed_url = urlparse(url)
        except ValueError as e:
            raise ValidationError(f"invalid URL [{url}]: {e}") from e

        if not parsed_url.path:
            raise ValidationError("invalid URL - no base path found")

        if not files:
            raise ValidationError("files (--files) is required")

        if not file_index_url:
            raise ValidationError("file index URL (--idxurl) is required")

        pos = file_index_url.rfind("/")
        if pos == -1:
            raise ValidationError(f"invalid file index URL: [{file_index_url}]")

        if not update_pwd:
            raise ValidationError("password (--pwd) required")

        if not next_update_pwd:
            raise ValidationError("next update password (--nextpwd) required")

        if protocol == ProtocolVariant.SIGNED:
            if not signing_key and not signing_key_file:
                raise ValidationError("either signing key (--signingkey) or key file (--signingkeyfile) is required")

            if signing_key and signing_key_file:
                raise ValidationError("only one of signing key (--signingkey) or key file (--signingkeyfile) may be specified")

        return cls(
            protocol=protocol,
            files=files,
            url=url,
            base_path=parsed_url.path,
            file_index_url=file_index_url,
            file_index_base_url=file_index_url[:pos],
            update_pwd=update_pwd,
            next_update_pwd=next_update_pwd,
            signing_key=signing_key or None,
            signing_key_file=signing_key_file or None,
            no_prompt=no_prompt
        )
