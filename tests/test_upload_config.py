import pytest
from pydantic import ValidationError as PydanticValidationError

from dcas_cli.models.upload import ProtocolVariant, UploadConfig
from dcas_cli.utils.exceptions import ValidationError

ARGS = {
    "files": "a.json",
    "url": "http://h/content",
    "file_index_url": "http://h/file/file:idx:ABC123",
    "update_pwd": "pwd1",
    "next_update_pwd": "pwd2",
}


def build(protocol=ProtocolVariant.OTP, **overrides):
    args = dict(ARGS, **overrides)
    return UploadConfig.from_args(protocol=protocol, **args)


def test_derived_fields():
    config = build()
    assert config.base_path == "/content"
    assert config.file_index_base_url == "http://h/file"
    assert config.no_prompt is False


def test_config_is_immutable():
    config = build()
    with pytest.raises(PydanticValidationError):
        config.url = "http://other/content"


@pytest.mark.parametrize("overrides, message", [
    ({"url": None}, "URL (--url) is required"),
    ({"url": "http://h"}, "no base path found"),
    ({"files": ""}, "files (--files) is required"),
    ({"file_index_url": None}, "file index URL (--idxurl) is required"),
    ({"file_index_url": "file:idx:ABC123"}, "invalid file index URL"),
    ({"update_pwd": ""}, "password (--pwd) required"),
    ({"next_update_pwd": None}, "next update password (--nextpwd) required"),
])
def test_invalid_args(overrides, message):
    with pytest.raises(ValidationError, match=message.replace("(", r"\(").replace(")", r"\)")):
        build(**overrides)


def test_signed_requires_a_signing_key():
    with pytest.raises(ValidationError, match="either signing key"):
        build(ProtocolVariant.SIGNED)


def test_signed_rejects_both_signing_key_sources():
    with pytest.raises(ValidationError, match="only one of signing key"):
        build(ProtocolVariant.SIGNED, signing_key="pem", signing_key_file="./keys/signing.key")


def test_signed_with_key_file():
    config = build(ProtocolVariant.SIGNED, signing_key_file="./keys/signing.key")
    assert config.signing_key is None
    assert config.signing_key_file == "./keys/signing.key"


def test_otp_ignores_signing_key():
    assert build(ProtocolVariant.OTP).signing_key is None
