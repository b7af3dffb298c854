"""
Pytest configuration and fixtures.
"""
import io
import tarfile
from datetime import datetime, timezone
from typing import List, Optional, Tuple

import pytest
from unittest.mock import AsyncMock, Mock

from retiro_api.schemas.signal import WeatherWarningSignal


def make_info(
	phenomenon: Optional[str] = "VI;Vientos",
	zone: Optional[str] = "722802",
	onset: Optional[str] = "2026-02-05T10:00:00+00:00",
	expires: Optional[str] = "2026-02-05T18:00:00+00:00",
	severity: Optional[str] = "Moderate",
) -> str:
	"""Build one AEMET-style CAP <info> section."""
	parts = ["<info>", "<language>es-ES</language>", "<category>Met</category>"]
	parts.append(
		"<eventCode><valueName>AEMET-Meteoalerta nivel</valueName><value>amarillo</value></eventCode>"
	)
	if phenomenon is not None:
		parts.append(
			f"<eventCode><valueName>AEMET-Meteoalerta fenomeno</valueName><value>{phenomenon}</value></eventCode>"
		)
	if severity is not None:
		parts.append(f"<severity>{severity}</severity>")
	if onset is not None:
		parts.append(f"<onset>{onset}</onset>")
	if expires is not None:
		parts.append(f"<expires>{expires}</expires>")
	parts.append("<area><areaDesc>Metropolitana y Henares</areaDesc>")
	if zone is not None:
		parts.append(f"<geocode><valueName>AEMET-Meteoalerta zona</valueName><value>{zone}</value></geocode>")
	parts.append("</area></info>")
	return "".join(parts)


def make_cap(*infos: str) -> str:
	"""Wrap <info> sections in a CAP alert document with an XML prolog."""
	body = "".join(infos)
	return (
		'<?xml version="1.0" encoding="UTF-8"?>\n'
		'<alert xmlns="urn:oasis:names:tc:emergency:cap:1.2">'
		"<identifier>2.49.0.0.724.0.ES.20260205080000.VI722802</identifier>"
		"<sender>http://www.aemet.es</sender>"
		"<status>Actual</status>"
		f"{body}"
		"</alert>"
	)


def make_tar(entries: List[Tuple[str, str]]) -> bytes:
	"""Build an in-memory ustar archive of (name, text) entries."""
	buffer = io.BytesIO()
	with tarfile.open(fileobj=buffer, mode="w", format=tarfile.USTAR_FORMAT) as archive:
		for name, content in entries:
			data = content.encode("utf-8")
			info = tarfile.TarInfo(name=name)
			info.size = len(data)
			archive.addfile(info, io.BytesIO(data))
	return buffer.getvalue()


@pytest.fixture
def now():
	"""Pinned reference instant: 2026-02-05 12:00 UTC (13:00 in Madrid)."""
	return datetime(2026, 2, 5, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_signal():
	"""Factory for signals with all-false defaults."""
	def _make_signal(**overrides) -> WeatherWarningSignal:
		values = {"fetched_at": datetime(2026, 2, 5, 12, 0, tzinfo=timezone.utc)}
		values.update(overrides)
		return WeatherWarningSignal(**values)
	return _make_signal


@pytest.fixture
def mock_aemet_client():
	"""Mock AEMET client returning a tar payload with one active wind warning."""
	client = AsyncMock()
	payload = make_tar([("Z_CAP_C_LEMM_20260205080000_AFAZ722802VI.xml", make_cap(make_info()))])
	client.get_latest_warnings_payload = AsyncMock(return_value=(payload, "application/x-tar"))
	client.close = AsyncMock()
	return client


@pytest.fixture
def mock_cache():
	"""Mock signal cache that always misses."""
	cache = Mock()
	cache.read_as_schema = AsyncMock(return_value=None)
	cache.create = AsyncMock(return_value=True)
	return cache
