"""
Orchestrates an upload run: fetch the file index, load the files, confirm,
upload them to DCAS and update the file index document.

Nothing is retried or rolled back. Files uploaded before a later failure
stay in DCAS; since DCAS IDs are content hashes, re-running the whole upload
is safe.
"""
from enum import Enum
from typing import Callable, List, Optional

from pydantic import BaseModel

from dcas_cli.config.logging_config import logger
from dcas_cli.models.file import FileIndex, FileInfo, results_to_json
from dcas_cli.models.upload import UploadConfig
from dcas_cli.services.dcas_service import upload_files
from dcas_cli.services.file_index_service import get_file_index
from dcas_cli.services.update_request_service import (
    UpdateAuthenticator, build_update_request, get_unique_suffix, new_authenticator, submit_update
)
from dcas_cli.utils.exceptions import UserAborted, ValidationError
from dcas_cli.utils.file_loader import describe_file, load_file, split_file_paths
from dcas_cli.utils.patch_utils import get_update_patch

MSG_CONTINUE_OR_ABORT = "Enter Y to continue or N to abort "


class UploadState(str, Enum):
    INIT = "init"
    INDEX_FETCHED = "index_fetched"
    FILES_LOADED = "files_loaded"
    CONFIRMED = "confirmed"
    UPLOADED = "uploaded"
    INDEX_UPDATED = "index_updated"
    DONE = "done"
    ABORTED = "aborted"    # User declined the upload, nothing was sent
    FAILED = "failed"


class UploadOutcome(BaseModel):
    """Model for the result of an upload run."""
    state: UploadState
    files: List[FileInfo] = []

    @property
    def aborted(self) -> bool:
        return self.state == UploadState.ABORTED


class UploadService:
    """Runs one upload for a validated configuration."""

    def __init__(
        self,
        config: UploadConfig,
        client,
        authenticator: Optional[UpdateAuthenticator] = None,
        confirm: Optional[Callable[[str], bool]] = None
    ):
        self.config = config
        self.client = client
        self.authenticator = authenticator
        self.confirm = confirm
        self.state = UploadState.INIT
        self.error: Optional[Exception] = None

    def run(self) -> UploadOutcome:
        """
        Execute the upload.

        Returns:
            The outcome: DONE with the uploaded files, or ABORTED if the
            user declined

        Raises:
            DCASError: The error of the failed step; state is set to FAILED
        """
        try:
            return self._run()
        except Exception as e:
            self.state = UploadState.FAILED
            self.error = e
            logger.debug(f"Upload failed: {e}")
            raise

    def _run(self) -> UploadOutcome:
        # Checks that need no network access
        paths = split_file_paths(self.config.files)
        for path in paths:
            describe_file(path)
        get_unique_suffix(self.config.file_index_url)
        if self.authenticator is None:
            self.authenticator = new_authenticator(self.config)

        file_index = get_file_index(self.client, self.config.file_index_url, self.config.base_path)
        self.state = UploadState.INDEX_FETCHED

        files = [load_file(path) for path in paths]
        self.state = UploadState.FILES_LOADED

        if not self.config.no_prompt:
            if not self._confirm_upload(files):
                self.state = UploadState.ABORTED
                logger.info("Upload aborted by user")
                return UploadOutcome(state=self.state, files=files)
            self.state = UploadState.CONFIRMED

        upload_files(self.client, self.config.url, files)
        self.state = UploadState.UPLOADED

        self._update_file_index(file_index, files)
        self.state = UploadState.INDEX_UPDATED

        self.state = UploadState.DONE
        return UploadOutcome(state=self.state, files=files)

    def _confirm_upload(self, files: List[FileInfo]) -> bool:
        """
        Ask the user to confirm the upload. A UserAborted raised by the
        prompt counts as a refusal.
        """
        if self.confirm is None:
            raise ValidationError("confirmation is required, no prompt available (use --noprompt)")

        prompt = f"Uploading the following files to [{self.config.url}]\n{results_to_json(files)}\n{MSG_CONTINUE_OR_ABORT}"
        try:
            return self.confirm(prompt)
        except UserAborted:
            return False

    def _update_file_index(self, file_index: FileIndex, files: List[FileInfo]) -> None:
        # Patch against the index fetched at the start of the run
        patch = get_update_patch(file_index, files)
        logger.debug(f"File index patch: {patch}")

        logger.info(f"Updating file index [{self.config.file_index_url}] using the {self.authenticator.protocol.value} protocol")
        request = build_update_request(self.config.file_index_url, patch, self.authenticator)
        submit_update(self.client, self.config.file_index_base_url, request)
