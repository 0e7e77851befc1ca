import json

import pytest

from dcas_cli.main import main

from conftest import INDEX_BASE_URL, INDEX_URL, UPLOAD_URL, FakeHTTPClient, error, index_doc, ok


def routes():
    return {
        ("GET", INDEX_URL): [ok(index_doc())],
        ("POST", UPLOAD_URL): [ok("X")],
        ("POST", INDEX_BASE_URL): [ok({})],
    }


def args(json_file, command="upload-otp", *extra):
    return [command, "--url", UPLOAD_URL, "--files", str(json_file), "--idxurl", INDEX_URL,
            "--pwd", "pwd1", "--nextpwd", "pwd2", *extra]


def test_upload_otp_prints_results(json_file, capsys):
    client = FakeHTTPClient(routes())

    assert main(args(json_file, "upload-otp", "--noprompt"), client=client) == 0

    output = json.loads(capsys.readouterr().out)
    assert output == [{"Name": "a.json", "ID": "X", "ContentType": "application/json"}]


def test_upload_signed(json_file, signing_key_pem, capsys):
    client = FakeHTTPClient(routes())

    assert main(args(json_file, "upload", "--noprompt", f"--signingkey={signing_key_pem}"), client=client) == 0

    assert json.loads(capsys.readouterr().out)[0]["ID"] == "X"


@pytest.mark.parametrize("key_args", [
    [],
    ["--signingkey", "pem", "--signingkeyfile", "./keys/signing.key"],
])
def test_signing_key_validation_before_network(json_file, key_args, capsys):
    client = FakeHTTPClient(routes())

    assert main(args(json_file, "upload", "--noprompt", *key_args), client=client) == 1

    assert client.calls == []
    assert "signing key" in capsys.readouterr().err


def test_error_exit_code(json_file, capsys):
    client = FakeHTTPClient({("GET", INDEX_URL): [error(404, "")]})

    assert main(args(json_file, "upload-otp", "--noprompt"), client=client) == 1

    assert "not found" in capsys.readouterr().err


def test_prompt_declined(json_file, monkeypatch, capsys):
    client = FakeHTTPClient(routes())
    monkeypatch.setattr("builtins.input", lambda: "n")

    assert main(args(json_file, "upload-otp"), client=client) == 0

    out = capsys.readouterr().out
    assert "Enter Y to continue or N to abort" in out
    assert out.strip().endswith("Operation aborted")
    assert client.posts_to(UPLOAD_URL) == []


def test_prompt_accepted(json_file, monkeypatch, capsys):
    client = FakeHTTPClient(routes())
    monkeypatch.setattr("builtins.input", lambda: "Y")

    assert main(args(json_file, "upload-otp"), client=client) == 0

    assert len(client.posts_to(INDEX_BASE_URL)) == 1


def test_prompt_end_of_input(json_file, monkeypatch, capsys):
    client = FakeHTTPClient(routes())

    def eof():
        raise EOFError()

    monkeypatch.setattr("builtins.input", eof)

    assert main(args(json_file, "upload-otp"), client=client) == 0
    assert "Operation aborted" in capsys.readouterr().out


def test_no_command(capsys):
    assert main([]) == 1
