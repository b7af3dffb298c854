from datetime import datetime
from typing import Optional
from pydantic import ConfigDict, Field
from retiro_api.schemas.base import BaseSchema
from retiro_api.schemas.alert import Severity


class WeatherWarningSignal(BaseSchema):
	"""
	Aggregate predictive signal derived from the relevant AEMET warnings at
	a reference instant. Serialized as a flat camelCase record.

	`has_warning_within_2_hours` and `has_warning_later_today` describe the
	single nearest upcoming warning and are never both true.
	"""
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	has_active_warning: bool = Field(default=False, alias="hasActiveWarning")
	has_warning_within_2_hours: bool = Field(default=False, alias="hasWarningWithin2Hours")
	has_warning_later_today: bool = Field(default=False, alias="hasWarningLaterToday")
	active_warning_severity: Optional[Severity] = Field(default=None, alias="activeWarningSeverity")
	next_warning_onset: Optional[datetime] = Field(default=None, alias="nextWarningOnset")
	next_warning_severity: Optional[Severity] = Field(default=None, alias="nextWarningSeverity")
	fetched_at: Optional[datetime] = Field(default=None, alias="fetchedAt")

	@classmethod
	def empty(cls, fetched_at: Optional[datetime] = None) -> "WeatherWarningSignal":
		"""All-false signal, used when there is nothing to report or the pipeline failed."""
		return cls(fetched_at=fetched_at)

	def with_fetched_at(self, fetched_at: Optional[datetime]) -> "WeatherWarningSignal":
		return self.model_copy(update={"fetched_at": fetched_at})
