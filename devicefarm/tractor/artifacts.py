"""Transfer artifacts to and from Device Farm pre-signed URLs."""

import logging
from pathlib import Path

import aiohttp

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class ArtifactTransferError(Exception):
    """An artifact could not be uploaded or downloaded."""


async def upload_file(url: str, path: Path) -> None:
    """Upload a local file to a pre-signed URL.

    Args:
        url: Pre-signed upload URL returned by Device Farm
        path: Local file to upload

    Raises:
        ArtifactTransferError: If the upload is rejected
        OSError: If the file cannot be read

    """
    size = path.stat().st_size
    headers = {"Content-Type": "application/octet-stream"}

    async with aiohttp.ClientSession() as session:
        with path.open("rb") as f:
            async with session.put(url, data=f, headers=headers) as response:
                if response.status != 200:
                    text = await response.text()
                    raise ArtifactTransferError(
                        f"Failed to upload {path.name}: {response.status} {text}"
                    )

    logger.info(f"Uploaded {path.name} ({size} bytes)")


async def download_file(url: str, destination: Path) -> Path:
    """Download a pre-signed artifact URL to a local file.

    Args:
        url: Artifact URL returned by Device Farm
        destination: Local file to write, parent directories are created

    Returns:
        The destination path

    Raises:
        ArtifactTransferError: If the download is rejected

    """
    destination.parent.mkdir(parents=True, exist_ok=True)

    async with aiohttp.ClientSession() as session:
        async with session.get(url) as response:
            if response.status != 200:
                text = await response.text()
                raise ArtifactTransferError(
                    f"Failed to download {destination.name}: {response.status} {text}"
                )

            with destination.open("wb") as f:
                async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                    f.write(chunk)

    logger.info(f"Downloaded {destination}")
    return destination
