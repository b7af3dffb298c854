from typing import Optional
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from retiro_api.config import settings
from retiro_api.controllers import status_controller, warnings_controller
from retiro_api.http_client.aemet_client import AemetClient
from retiro_api.http_client.madrid_client import MadridParksClient
from retiro_api.logging_config import setup_logging
from retiro_api.redis_client import RetiroRedis
import logging

# Setup structured JSON logging to stdout
setup_logging(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	app.state.madrid_client = MadridParksClient()
	app.state.aemet_client = AemetClient(settings.aemet_api_key) if settings.aemet_api_key else None
	app.state.signal_cache = RetiroRedis() if settings.cache_enabled else None
	if app.state.aemet_client is None:
		logger.warning("AEMET_API_KEY not set, weather warnings will always be empty")
	try:
		yield
	finally:
		await app.state.madrid_client.close()
		if app.state.aemet_client is not None:
			await app.state.aemet_client.close()
		if app.state.signal_cache is not None:
			await app.state.signal_cache.close()


app = FastAPI(
	title="Retiro Status API",
	description="Official El Retiro park status plus predictive closure advisories from AEMET warnings",
	version="1.0.0",
	lifespan=lifespan
)

app.add_middleware(
	CORSMiddleware,
	allow_origins=["*"],
	allow_credentials=False,
	allow_methods=["GET", "OPTIONS"],
	allow_headers=["Content-Type"],
)

app.include_router(status_controller.router)
app.include_router(warnings_controller.router)

@app.get("/")
async def root():
	return {
		"message": "Welcome to the Retiro Status API!",
		"endpoints": {
			"status": "/api/status",
			"warnings": "/api/aemet-warnings",
			"display": "/api/display"
		}
	}

@app.get("/health")
async def health(request: Request):
	"""Health check endpoint."""
	cache = getattr(request.app.state, "signal_cache", None)
	if cache is None:
		return {"status": "healthy", "cache": "disabled"}
	try:
		cache_healthy = await cache.ping()
		return {
			"status": "healthy",
			"cache": "connected" if cache_healthy else "disconnected"
		}
	except Exception as e:
		return {
			"status": "unhealthy",
			"cache": "error",
			"error": str(e)
		}


def run(host: Optional[str] = None, port: Optional[int] = None):
	"""Serve the API with uvicorn (entry point of the retiro-api script)."""
	host = host or settings.host
	port = port or settings.port
	logger.info(f"Starting Retiro Status API on {host}:{port}")
	uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
	run()
