from retiro_api.schemas.alert import AlertRecord, Severity, SEVERITY_RANK
from retiro_api.schemas.signal import WeatherWarningSignal
from retiro_api.schemas.status import (
	ParkStatus,
	ClosureAdvisory,
	ClosureAdvisoryState,
	PrimaryStatusMode,
	PrimaryStatusResolution,
	StatusDisplay,
)

__all__ = [
	"AlertRecord",
	"Severity",
	"SEVERITY_RANK",
	"WeatherWarningSignal",
	"ParkStatus",
	"ClosureAdvisory",
	"ClosureAdvisoryState",
	"PrimaryStatusMode",
	"PrimaryStatusResolution",
	"StatusDisplay",
]
