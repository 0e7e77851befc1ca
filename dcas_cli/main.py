#!/usr/bin/env python3
"""
Upload files to DCAS and add them to a Sidetree file index document.

Usage:
    dcas-upload upload --url <url> --files <files> --idxurl <idxurl> --pwd <pwd> --nextpwd <nextpwd>
                       (--signingkey <pem> | --signingkeyfile <path>) [--noprompt]
    dcas-upload upload-otp --url <url> --files <files> --idxurl <idxurl> --pwd <pwd> --nextpwd <nextpwd> [--noprompt]

Example:
    dcas-upload upload --url http://localhost:48326/content \\
        --files "./testdata/person.schema.json;./testdata/raised-hand.png" \\
        --idxurl http://localhost:48326/file/file:idx:EiAuN66iEpuRt6IIu-2sO3bRM74sS_AIuY6jTbtFUsqAaA== \\
        --pwd pwd1 --nextpwd pwd2 --signingkeyfile ./keys/signing.key --noprompt

The response is a JSON document with the names of the files that were
updated along with their DCAS ID and content type.
"""

import argparse
import sys
from typing import List, Optional

from dcas_cli.config.logging_config import logger
from dcas_cli.models.file import results_to_json
from dcas_cli.models.upload import ProtocolVariant, UploadConfig
from dcas_cli.services.http_client import HTTPClient
from dcas_cli.services.upload_service import UploadService
from dcas_cli.utils.exceptions import DCASError, UserAborted

MSG_ABORTED = "Operation aborted"


def prompt_confirmation(prompt: str) -> bool:
    """
    Print the prompt and read the answer from stdin. Only 'y' confirms.
    """
    print(prompt, flush=True)
    try:
        answer = input()
    except EOFError:
        raise UserAborted()
    return answer.strip().lower() == "y"


def parse_args(argv: Optional[List[str]] = None):
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--files', help='The semicolon separated paths of the files to upload. Example: --files "./samples/content1.json;./samples/image.png"')
    common.add_argument('--url', help='The URL to which to add the file(s). Example: --url http://localhost:48326/content')
    common.add_argument('--idxurl', help='The URL of the file index Sidetree document to be updated with the new/updated files. Example: --idxurl http://localhost:48326/file/file:idx:1234')
    common.add_argument('--pwd', help='The password required to update the file index Sidetree document. Example: --pwd pwd1')
    common.add_argument('--nextpwd', help='The password required for the next update of the file index Sidetree document. Example: --nextpwd pwd2')
    common.add_argument('--noprompt', action='store_true', help='If specified then the upload operation will not prompt for confirmation')

    parser = argparse.ArgumentParser(description='Upload files to DCAS and add them to a Sidetree file index document')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    upload_parser = subparsers.add_parser('upload', parents=[common], help='Upload files; the index update is signed with the update key')
    upload_parser.add_argument('--signingkey', help='The private key PEM used for signing the update of the index document. Example: --signingkey="$(cat ./keys/signing.key)"')
    upload_parser.add_argument('--signingkeyfile', help='The file that contains the private key PEM used for signing the update of the index document. Example: --signingkeyfile ./keys/signing.key')

    subparsers.add_parser('upload-otp', parents=[common], help='Upload files; the index update is authenticated by a one-time password pair')

    return parser, parser.parse_args(argv)


def build_config(args) -> UploadConfig:
    protocol = ProtocolVariant.SIGNED if args.command == 'upload' else ProtocolVariant.OTP
    return UploadConfig.from_args(
        protocol=protocol,
        files=args.files,
        url=args.url,
        file_index_url=args.idxurl,
        update_pwd=args.pwd,
        next_update_pwd=args.nextpwd,
        signing_key=getattr(args, 'signingkey', None),
        signing_key_file=getattr(args, 'signingkeyfile', None),
        no_prompt=args.noprompt
    )


def main(argv: Optional[List[str]] = None, client=None) -> int:
    parser, args = parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = build_config(args)
        service = UploadService(config, client or HTTPClient(), confirm=prompt_confirmation)
        outcome = service.run()
    except DCASError as e:
        logger.debug("Upload failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if outcome.aborted:
        print(MSG_ABORTED)
        return 0

    print(results_to_json(outcome.files))
    return 0


if __name__ == '__main__':
    sys.exit(main())
