"""
FastAPI dependencies. Clients and the cache are created once at startup
(see main.lifespan) and stored on app.state; tests override these.
"""
from datetime import datetime
from typing import Optional
from fastapi import Request

from retiro_api.http_client.aemet_client import AemetClient
from retiro_api.http_client.madrid_client import MadridParksClient
from retiro_api.redis_client import RetiroRedis
from retiro_api.utils.datetime_utils import utc_now


def get_clock() -> datetime:
	"""Reference instant for the request."""
	return utc_now()


def get_aemet_client(request: Request) -> Optional[AemetClient]:
	"""AEMET client, or None when no API key is configured."""
	return getattr(request.app.state, "aemet_client", None)


def get_madrid_client(request: Request) -> MadridParksClient:
	return request.app.state.madrid_client


def get_signal_cache(request: Request) -> Optional[RetiroRedis]:
	return getattr(request.app.state, "signal_cache", None)
