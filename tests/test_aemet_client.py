"""
Unit tests for AemetClient and the retrying base client.
"""
import pytest
import httpx
from unittest.mock import AsyncMock, patch
from retiro_api.exceptions import UpstreamError
from retiro_api.http_client.aemet_client import AemetClient


def make_client(handler) -> AemetClient:
	"""AemetClient whose transport is an in-process handler, with no backoff."""
	client = AemetClient("test-key", base_url="https://aemet.test/api")
	client.retry_delays = [0.0]
	client.client = httpx.AsyncClient(
		base_url=client.base_url,
		headers=client.default_headers,
		transport=httpx.MockTransport(handler)
	)
	return client


class TestGetLatestWarningsPayload:
	"""Test cases for AemetClient.get_latest_warnings_payload."""
	
	@pytest.mark.asyncio
	async def test_two_step_lookup(self):
		seen = []
		
		def handler(request: httpx.Request) -> httpx.Response:
			seen.append(request)
			if request.url.path == "/api/avisos_cap/ultimoelaborado/area/72":
				return httpx.Response(200, json={
					"descripcion": "exito",
					"estado": 200,
					"datos": "https://aemet.test/sh/abc123",
				})
			return httpx.Response(200, content=b"tar-bytes", headers={"content-type": "application/x-tar"})
		
		client = make_client(handler)
		raw, content_type = await client.get_latest_warnings_payload("72")
		await client.close()
		
		assert raw == b"tar-bytes"
		assert content_type == "application/x-tar"
		assert seen[0].headers["api_key"] == "test-key"
		assert str(seen[1].url) == "https://aemet.test/sh/abc123"
	
	@pytest.mark.asyncio
	async def test_non_success_descriptor(self):
		def handler(request: httpx.Request) -> httpx.Response:
			return httpx.Response(200, json={"descripcion": "API key invalido", "estado": 401})
		
		client = make_client(handler)
		with pytest.raises(UpstreamError) as exc_info:
			await client.get_latest_warnings_payload("72")
		await client.close()
		
		assert "API key invalido" in exc_info.value.message
	
	@pytest.mark.asyncio
	async def test_missing_datos(self):
		def handler(request: httpx.Request) -> httpx.Response:
			return httpx.Response(200, json={"estado": 200})
		
		client = make_client(handler)
		with pytest.raises(UpstreamError):
			await client.get_latest_warnings_payload("72")
		await client.close()
	
	@pytest.mark.asyncio
	async def test_malformed_descriptor(self):
		def handler(request: httpx.Request) -> httpx.Response:
			return httpx.Response(200, content=b"<html>oops</html>")
		
		client = make_client(handler)
		with pytest.raises(UpstreamError):
			await client.get_latest_warnings_payload("72")
		await client.close()
	
	@pytest.mark.asyncio
	async def test_datos_failure(self):
		def handler(request: httpx.Request) -> httpx.Response:
			if "avisos_cap" in request.url.path:
				return httpx.Response(200, json={"estado": 200, "datos": "https://aemet.test/sh/gone"})
			return httpx.Response(404)
		
		client = make_client(handler)
		with pytest.raises(UpstreamError):
			await client.get_latest_warnings_payload("72")
		await client.close()


class TestRetries:
	"""Test cases for BaseHTTPClient retry behaviour."""
	
	@pytest.mark.asyncio
	async def test_retries_then_succeeds(self):
		calls = {"count": 0}
		
		def handler(request: httpx.Request) -> httpx.Response:
			calls["count"] += 1
			if calls["count"] < 3:
				return httpx.Response(503)
			return httpx.Response(200, json={"ok": True})
		
		client = make_client(handler)
		with patch("retiro_api.http_client.base_client.asyncio.sleep", AsyncMock()) as mock_sleep:
			result = await client.get("/anything")
		await client.close()
		
		assert result == {"ok": True}
		assert calls["count"] == 3
		assert mock_sleep.await_count == 2
	
	@pytest.mark.asyncio
	async def test_gives_up_after_max_retries(self):
		calls = {"count": 0}
		
		def handler(request: httpx.Request) -> httpx.Response:
			calls["count"] += 1
			return httpx.Response(500)
		
		client = make_client(handler)
		client.max_retries = 3
		with patch("retiro_api.http_client.base_client.asyncio.sleep", AsyncMock()):
			with pytest.raises(httpx.HTTPStatusError):
				await client.get("/anything")
		await client.close()
		
		assert calls["count"] == 3
	
	def test_backoff_delays_cap_at_last_value(self):
		client = AemetClient("key", base_url="https://aemet.test/api")
		client.retry_delays = [1.0, 2.0, 4.0]
		
		assert [client._delay_for(attempt) for attempt in range(5)] == [1.0, 2.0, 4.0, 4.0, 4.0]
