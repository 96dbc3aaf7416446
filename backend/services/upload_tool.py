"""Wrapper around the ``ia`` command-line uploader."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from .errors import UploadToolError

logger = logging.getLogger(__name__)


@runtime_checkable
class SupportsArchiveUpload(Protocol):
    async def upload(
        self,
        identifier: str,
        files: Sequence[Path],
        metadata: Mapping[str, str],
    ) -> None: ...


def build_upload_args(
    command: str,
    identifier: str,
    files: Sequence[Path],
    metadata: Mapping[str, str],
) -> list[str]:
    """Return the argv for ``ia upload`` with one ``--metadata`` per field."""
    args = [command, "upload", identifier, *(str(path) for path in files)]
    args.extend(f"--metadata={key}:{value}" for key, value in metadata.items())
    return args


class IaUploadTool:
    """Runs ``ia upload`` as a subprocess and raises on a non-zero exit."""

    def __init__(self, command: str = "ia") -> None:
        self.command = command

    async def upload(
        self,
        identifier: str,
        files: Sequence[Path],
        metadata: Mapping[str, str],
    ) -> None:
        args = build_upload_args(self.command, identifier, files, metadata)
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise UploadToolError(
                f"Could not run {self.command}: {exc}",
                returncode=None,
            ) from exc

        stdout, stderr = await process.communicate()
        output = "\n".join(
            part.decode("utf-8", errors="replace").strip()
            for part in (stdout, stderr)
            if part
        )
        if process.returncode != 0:
            raise UploadToolError(
                f"Command failed: {' '.join(args)}\n{output}",
                returncode=process.returncode,
                output=output,
            )
        logger.debug(
            "Upload command finished",
            extra={"identifier": identifier, "output": output},
        )
