import os
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _split_csv(value: str) -> List[str]:
	return [part.strip() for part in value.split(",") if part.strip()]


class Settings:
	# AEMET OpenData configuration
	aemet_api_key: Optional[str] = os.getenv("AEMET_API_KEY") or None
	aemet_api_base_url: str = os.getenv("AEMET_API_BASE_URL", "https://opendata.aemet.es/opendata/api")
	# Area 72 = Comunidad de Madrid
	aemet_area_code: str = os.getenv("AEMET_AREA_CODE", "72")
	# 722801=Sierra, 722802=Metropolitana y Henares (Retiro), 722803=Sur, Vegas y Oeste
	aemet_target_zone: str = os.getenv("AEMET_TARGET_ZONE", "722802")
	# Wind (VI;Vientos) and snow (NE;Nevadas) trigger park closures
	aemet_relevant_phenomena: str = os.getenv("AEMET_RELEVANT_PHENOMENA", "VI,NE")

	# Calendar day boundaries for "later today" are evaluated in this zone
	local_timezone: str = os.getenv("LOCAL_TIMEZONE", "Europe/Madrid")

	# Madrid municipal status feed
	madrid_status_url: str = os.getenv(
		"MADRID_STATUS_URL",
		"https://sigma.madrid.es/hosted/rest/services/MEDIO_AMBIENTE/ALERTAS_PARQUES/MapServer/0/query"
	)
	madrid_target_layer_name: str = os.getenv("MADRID_TARGET_LAYER_NAME", "ALERTAS CLIMATOLOGICAS PARQUES")
	retiro_park_name: str = os.getenv("RETIRO_PARK_NAME", "retiro")

	# Outbound request behaviour
	request_timeout_seconds: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "8"))
	request_max_retries: int = int(os.getenv("REQUEST_MAX_RETRIES", "3"))
	retry_backoff_seconds: str = os.getenv("RETRY_BACKOFF_SECONDS", "1,2,4")

	# Redis configuration (optional signal cache)
	redis_host: str = os.getenv("REDIS_HOST", "localhost")
	redis_port: int = int(os.getenv("REDIS_PORT", "6379"))
	redis_db: int = int(os.getenv("REDIS_DB", "0"))
	redis_password: Optional[str] = os.getenv("REDIS_PASSWORD", None)
	cache_enabled: bool = os.getenv("CACHE_ENABLED", "false").lower() in ("1", "true")

	# Freshness windows (seconds)
	warnings_cache_ttl: int = int(os.getenv("WARNINGS_CACHE_TTL", "900"))
	warnings_stale_ttl: int = int(os.getenv("WARNINGS_STALE_TTL", "1800"))
	warnings_fallback_ttl: int = int(os.getenv("WARNINGS_FALLBACK_TTL", "300"))
	warnings_fallback_stale_ttl: int = int(os.getenv("WARNINGS_FALLBACK_STALE_TTL", "600"))
	status_cache_ttl: int = int(os.getenv("STATUS_CACHE_TTL", "300"))
	status_stale_ttl: int = int(os.getenv("STATUS_STALE_TTL", "600"))

	# HTTP server
	host: str = os.getenv("HOST", "0.0.0.0")
	port: int = int(os.getenv("PORT", "8000"))

	log_level: str = os.getenv("LOG_LEVEL", "INFO")

	@property
	def relevant_phenomena(self) -> List[str]:
		"""Phenomenon codes that can close the park, upper-cased."""
		return [code.upper() for code in _split_csv(self.aemet_relevant_phenomena)]

	@property
	def retry_delays(self) -> List[float]:
		"""Backoff delay (seconds) applied after each failed attempt."""
		return [float(delay) for delay in _split_csv(self.retry_backoff_seconds)]

	@property
	def warnings_cache_control(self) -> str:
		return f"s-maxage={self.warnings_cache_ttl}, stale-while-revalidate={self.warnings_stale_ttl}"

	@property
	def warnings_fallback_cache_control(self) -> str:
		return f"s-maxage={self.warnings_fallback_ttl}, stale-while-revalidate={self.warnings_fallback_stale_ttl}"

	@property
	def status_cache_control(self) -> str:
		return f"s-maxage={self.status_cache_ttl}, stale-while-revalidate={self.status_stale_ttl}"

	@property
	def redis_url(self) -> str:
		if self.redis_password:
			return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/{self.redis_db}"
		return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"

settings = Settings()
