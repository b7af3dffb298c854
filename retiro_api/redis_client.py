import logging
from typing import Optional, Type, TypeVar
import redis.asyncio as redis
from retiro_api.config import settings
from retiro_api.schemas.base import BaseSchema

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseSchema)

class RetiroRedis:
	"""
	Small async Redis wrapper used as the optional signal cache.
	Schemas are stored as their JSON form (BaseSchema.to_redis_json).
	Instances are created at startup and passed to the code that needs them.
	"""

	def __init__(self, client: Optional[redis.Redis] = None):
		self.client = client or redis.from_url(
			settings.redis_url,
			decode_responses=True,
			socket_connect_timeout=2,
			socket_timeout=2
		)

	async def create(self, key: str, value: BaseSchema, ttl: Optional[int] = None) -> bool:
		"""
		Create or update a key holding a serialized schema.

		Args:
			key: Redis key
			value: Schema object to store
			ttl: Optional time-to-live in seconds

		Returns:
			True if successful
		"""
		try:
			serialized = value.to_redis_json()
			if ttl:
				return bool(await self.client.setex(key, ttl, serialized))
			return bool(await self.client.set(key, serialized))
		except Exception as e:
			raise ValueError(f"Failed to create key {key}: {str(e)}")

	async def read_as_schema(self, key: str, schema_class: Type[T], entity_type: str = "entity") -> Optional[T]:
		"""
		Read a value from Redis and deserialize it to a schema object.
		Any failure (missing key, bad JSON, validation error, connection
		error) is logged and reported as a cache miss.

		Args:
			key: Redis key
			schema_class: BaseSchema subclass (e.g., WeatherWarningSignal)
			entity_type: Type of entity (for logging)

		Returns:
			Schema object if successful, None otherwise
		"""
		try:
			raw_data = await self.client.get(key)
			if raw_data is None:
				return None
			return schema_class.from_redis_json(raw_data)
		except Exception as e:
			logger.warning(f"Failed to load {entity_type} from Redis key {key}: {str(e)}")
			return None

	async def ping(self) -> bool:
		"""
		Test Redis connection.

		Returns:
			True if connection is alive
		"""
		try:
			return bool(await self.client.ping())
		except Exception as e:
			raise ConnectionError(f"Redis connection failed: {str(e)}")

	async def close(self):
		await self.client.aclose()
