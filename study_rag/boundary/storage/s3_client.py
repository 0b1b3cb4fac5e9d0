"""
S3 client for the documents bucket.

Resolves storage keys to presigned download URLs and fetches file bytes
over HTTP for the ingestion pipeline.

Dependencies: boto3, httpx
System role: File storage collaborator (getDownloadUrl / fetch)
"""

import asyncio
import logging

import boto3
import httpx
from botocore.exceptions import ClientError

from study_rag.core.exceptions import StorageError

logger = logging.getLogger(__name__)

_DEFAULT_CONTENT_TYPE = "application/octet-stream"


class S3DocumentStorage:
    """S3-backed file storage exposing download URLs and HTTP fetch."""

    def __init__(
        self,
        bucket: str,
        region: str = "ap-southeast-2",
        presigned_url_expiry: int = 3600,
        fetch_timeout: float = 30.0,
        s3_client=None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize storage for the document bucket.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
            presigned_url_expiry: Download URL lifetime in seconds
            fetch_timeout: HTTP timeout for fetch() in seconds
            s3_client: Pre-built boto3 S3 client (built from region when None)
            http_client: Shared httpx client (one is created and owned when None)
        """
        self._bucket = bucket
        self._region = region
        self._expiry = presigned_url_expiry
        self._s3_client = s3_client or boto3.client("s3", region_name=region)
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(fetch_timeout),
            follow_redirects=True,
        )

    def _presign(self, file_ref: str) -> str | None:
        try:
            self._s3_client.head_object(Bucket=self._bucket, Key=file_ref)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code")
            if error_code in ("404", "NoSuchKey"):
                return None
            raise StorageError(
                f"Failed to resolve S3 object: {e}",
                operation="presign",
                details={"file_ref": file_ref},
            ) from e

        return self._s3_client.generate_presigned_url(
            ClientMethod="get_object",
            Params={"Bucket": self._bucket, "Key": file_ref},
            ExpiresIn=self._expiry,
        )

    async def get_download_url(self, file_ref: str) -> str | None:
        """
        Generate a presigned download URL for a stored file.

        Args:
            file_ref: S3 object key

        Returns:
            Presigned GET URL, or None when the object does not exist

        Raises:
            StorageError: When S3 rejects the request for another reason
        """
        if not file_ref:
            return None
        url = await asyncio.to_thread(self._presign, file_ref)
        logger.debug(
            f"{__name__}:get_download_url - Resolved file reference",
            extra={"file_ref": file_ref, "found": url is not None},
        )
        return url

    async def fetch(self, url: str) -> tuple[bytes, str]:
        """
        Download a file over HTTP.

        Args:
            url: Download URL (usually from get_download_url)

        Returns:
            tuple[bytes, str]: (raw bytes, declared content type without parameters)

        Raises:
            StorageError: On timeout, non-2xx status or transport failure
        """
        try:
            response = await self._http_client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise StorageError(f"Timeout fetching file: {e}", operation="fetch") from e
        except httpx.HTTPStatusError as e:
            raise StorageError(
                f"HTTP {e.response.status_code} fetching file",
                operation="fetch",
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            raise StorageError(f"HTTP error fetching file: {e}", operation="fetch") from e

        content_type = response.headers.get("content-type", _DEFAULT_CONTENT_TYPE)
        content_type = content_type.split(";")[0].strip().lower()

        logger.info(
            f"{__name__}:fetch - Downloaded file",
            extra={"bytes": len(response.content), "content_type": content_type},
        )
        return response.content, content_type

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http_client.aclose()
