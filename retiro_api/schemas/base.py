from typing import Any, Dict
import json
from pydantic import BaseModel, ConfigDict

class BaseSchema(BaseModel):
	"""
	Base schema class with JSON round-tripping helpers used by the cache
	and the HTTP layer. Fields with aliases are emitted under their alias.
	"""
	
	model_config = ConfigDict(populate_by_name=True)
	
	def to_dict(self) -> Dict[str, Any]:
		"""Convert model to a JSON-compatible dictionary (datetimes as ISO strings)."""
		return json.loads(self.model_dump_json(by_alias=True))
	
	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "BaseSchema":
		"""Create model instance from dictionary, accepting field names or aliases."""
		return cls.model_validate(data)
	
	def to_redis_json(self) -> str:
		"""
		Serialize the schema object to a JSON string for Redis storage.
		"""
		return json.dumps(self.to_dict())

	@classmethod
	def from_redis_json(cls, json_str: str) -> "BaseSchema":
		"""
		Deserialize a JSON string from Redis back into a schema object.

		Raises:
			ValueError: If the stored value is not a JSON object
		"""
		data = json.loads(json_str)
		if not isinstance(data, dict):
			raise ValueError(f"expected a JSON object, got {type(data).__name__}")
		return cls.from_dict(data)
