"""
Unit tests for S3DocumentStorage.

boto3 is replaced by a MagicMock client and HTTP traffic by
httpx.MockTransport.
"""

from unittest.mock import MagicMock

import httpx
import pytest
from botocore.exceptions import ClientError

from study_rag.boundary.storage import S3DocumentStorage
from study_rag.core.exceptions import StorageError


def _client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, "HeadObject")


@pytest.fixture
def s3_client():
    client = MagicMock()
    client.generate_presigned_url.return_value = "https://bucket.s3/documents/a.pdf?sig=1"
    return client


def _storage(s3_client, handler=None) -> S3DocumentStorage:
    http_client = None
    if handler is not None:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return S3DocumentStorage(
        bucket="study-docs",
        presigned_url_expiry=600,
        s3_client=s3_client,
        http_client=http_client,
    )


class TestGetDownloadUrl:
    @pytest.mark.asyncio
    async def test_presigns_existing_object(self, s3_client):
        storage = _storage(s3_client)

        url = await storage.get_download_url("documents/a.pdf")

        assert url == "https://bucket.s3/documents/a.pdf?sig=1"
        s3_client.head_object.assert_called_once_with(Bucket="study-docs", Key="documents/a.pdf")
        s3_client.generate_presigned_url.assert_called_once_with(
            ClientMethod="get_object",
            Params={"Bucket": "study-docs", "Key": "documents/a.pdf"},
            ExpiresIn=600,
        )
        await storage.aclose()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", ["404", "NoSuchKey"])
    async def test_missing_object_returns_none(self, s3_client, code):
        s3_client.head_object.side_effect = _client_error(code)
        storage = _storage(s3_client)

        assert await storage.get_download_url("documents/missing.pdf") is None
        s3_client.generate_presigned_url.assert_not_called()
        await storage.aclose()

    @pytest.mark.asyncio
    async def test_other_errors_raise(self, s3_client):
        s3_client.head_object.side_effect = _client_error("AccessDenied")
        storage = _storage(s3_client)

        with pytest.raises(StorageError) as exc_info:
            await storage.get_download_url("documents/a.pdf")
        assert exc_info.value.details["operation"] == "presign"
        await storage.aclose()

    @pytest.mark.asyncio
    async def test_empty_ref(self, s3_client):
        storage = _storage(s3_client)

        assert await storage.get_download_url("") is None
        s3_client.head_object.assert_not_called()
        await storage.aclose()


class TestFetch:
    @pytest.mark.asyncio
    async def test_returns_bytes_and_bare_content_type(self, s3_client):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, content=b"Hello world", headers={"Content-Type": "Text/Plain; charset=utf-8"}
            )

        storage = _storage(s3_client, handler)

        blob, content_type = await storage.fetch("https://bucket.s3/a.txt")

        assert blob == b"Hello world"
        assert content_type == "text/plain"

    @pytest.mark.asyncio
    async def test_missing_content_type_defaults(self, s3_client):
        storage = _storage(s3_client, lambda request: httpx.Response(200, content=b"\x00\x01"))

        _, content_type = await storage.fetch("https://bucket.s3/a.bin")

        assert content_type == "application/octet-stream"

    @pytest.mark.asyncio
    async def test_http_status_error(self, s3_client):
        storage = _storage(s3_client, lambda request: httpx.Response(403))

        with pytest.raises(StorageError) as exc_info:
            await storage.fetch("https://bucket.s3/a.txt")
        assert exc_info.value.details == {"operation": "fetch", "status_code": 403}

    @pytest.mark.asyncio
    async def test_timeout(self, s3_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        storage = _storage(s3_client, handler)

        with pytest.raises(StorageError, match="Timeout"):
            await storage.fetch("https://bucket.s3/a.txt")

    @pytest.mark.asyncio
    async def test_transport_error(self, s3_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        storage = _storage(s3_client, handler)

        with pytest.raises(StorageError, match="HTTP error"):
            await storage.fetch("https://bucket.s3/a.txt")

    @pytest.mark.asyncio
    async def test_shared_client_is_not_closed(self, s3_client):
        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200))
        )
        storage = S3DocumentStorage(bucket="b", s3_client=s3_client, http_client=http_client)

        await storage.aclose()

        assert not http_client.is_closed
        await http_client.aclose()
