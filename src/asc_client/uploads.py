"""
Asset upload helpers.

Screenshots are uploaded in two phases: the API first reserves the asset and
answers with signed upload operations, the bytes are sent to those URLs, then
the asset is committed with ``uploaded: true`` and its MD5 checksum.
"""

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .exceptions import UploadError, ValidationError
from .models import UploadOperation
from .transport import Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadFile:
    """A local file read into memory for upload."""

    file_name: str
    file_size: int
    data: bytes

    @property
    def checksum(self) -> str:
        return hashlib.md5(self.data).hexdigest()


def read_upload_file(file_path: Union[str, Path]) -> UploadFile:
    """
    Read a file to upload.

    Raises:
        ValidationError: If the file cannot be found or read
    """
    path = Path(file_path)
    try:
        stat = path.stat()
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ValidationError(f"Cannot read upload file {file_path}: {e}")

    if stat.st_size == 0:
        raise ValidationError(f"Upload file is empty: {file_path}")

    return UploadFile(file_name=path.name, file_size=len(data), data=data)


def perform_upload_operations(
    transport: Transport,
    operations: Optional[List[UploadOperation]],
    data: bytes,
) -> None:
    """
    Send every upload operation in order.

    Raises:
        UploadError: If no operations were provided or one is not accepted
    """
    if not operations:
        raise UploadError("No upload operations returned for the reserved asset")

    for index, operation in enumerate(operations, start=1):
        if not operation.url:
            raise UploadError(f"Upload operation {index} has no URL")

        response = transport.upload(operation, data)
        if response.status_code != 200:
            logger.error(
                f"Upload operation {index}/{len(operations)} failed with "
                f"status {response.status_code}"
            )
            raise UploadError(
                f"Upload failed with status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        logger.info(f"Upload operation {index}/{len(operations)} completed")
