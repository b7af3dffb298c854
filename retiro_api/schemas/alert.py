from typing import Dict, Literal, Optional
from pydantic import ConfigDict
from retiro_api.schemas.base import BaseSchema

Severity = Literal["minor", "moderate", "severe", "extreme"]

# Rank order used when picking the worst active severity
SEVERITY_RANK: Dict[str, int] = {
	"minor": 1,
	"moderate": 2,
	"severe": 3,
	"extreme": 4,
}


class AlertRecord(BaseSchema):
	"""
	One weather-warning entry extracted from an AEMET CAP <info> section.

	Values are kept as read from the document: timestamps are raw strings
	(parsed later, failing closed) and severity is only lower-cased.
	`phenomenon` usually looks like "VI;Vientos" and `zone` may hold
	several space-separated codes.
	"""
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	onset: Optional[str] = None
	expires: Optional[str] = None
	severity: Optional[str] = None
	phenomenon: Optional[str] = None
	zone: Optional[str] = None

	@property
	def phenomenon_code(self) -> Optional[str]:
		"""Leading code of the phenomenon ("VI" for "VI;Vientos"), upper-cased."""
		if not self.phenomenon:
			return None
		return self.phenomenon.split(";")[0].strip().upper()

	@property
	def known_severity(self) -> Optional[Severity]:
		"""Severity if it is one of the ranked levels, otherwise None."""
		if self.severity in SEVERITY_RANK:
			return self.severity  # type: ignore[return-value]
		return None
