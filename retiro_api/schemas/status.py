from datetime import datetime
from enum import Enum
from typing import Dict, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from retiro_api.schemas.base import BaseSchema
from retiro_api.schemas.signal import WeatherWarningSignal

StatusType = Literal["open", "restricted", "closed"]


class ClosureAdvisoryState(str, Enum):
	NONE = "none"
	LIKELY_CLOSED_NOW = "likely_closed_now"
	CLOSING_SOON = "closing_soon"
	CLOSING_LATER_TODAY = "closing_later_today"


class PrimaryStatusMode(str, Enum):
	OFFICIAL = "official"
	PREDICTED_CLOSED = "predicted_closed"
	CLOSING = "closing"


class ParkStatus(BaseSchema):
	"""Authoritative park status from the Madrid municipal feed."""
	status: StatusType
	code: int = Field(ge=1, le=6)
	message: str
	incidents: Optional[str] = None
	observations: Optional[str] = None
	updated_at: datetime
	# Date Madrid last updated the alert ("DD/MM/YYYY")
	source_updated_at: Optional[str] = None


class ClosureAdvisory(BaseSchema):
	"""Supplementary closure-risk classification shown next to the official status."""
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	state: ClosureAdvisoryState = ClosureAdvisoryState.NONE
	next_warning_onset: Optional[datetime] = Field(default=None, alias="nextWarningOnset")


class PrimaryStatusResolution(BaseSchema):
	"""Mode and theme actually displayed. theme_code is presentation only."""
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	mode: PrimaryStatusMode
	theme_code: int = Field(ge=1, le=6, alias="themeCode")


class StatusDisplay(BaseSchema):
	"""Everything the rendering layer needs to pick copy and colours."""
	status: Optional[ParkStatus] = None
	signal: WeatherWarningSignal
	advisory: ClosureAdvisory
	primary: PrimaryStatusResolution


class StatusTheme(BaseModel):
	bg_color: str
	text_color: str


STATUS_THEMES: Dict[int, StatusTheme] = {
	1: StatusTheme(bg_color="#2ECC71", text_color="#FFFFFF"),
	2: StatusTheme(bg_color="#3498DB", text_color="#FFFFFF"),
	3: StatusTheme(bg_color="#F1C40F", text_color="#000000"),
	4: StatusTheme(bg_color="#E67E22", text_color="#FFFFFF"),
	5: StatusTheme(bg_color="#C0392B", text_color="#FFFFFF"),
	6: StatusTheme(bg_color="#C0392B", text_color="#FFFFFF"),
}

# Distinct from the closed red; used for the predictive near-term closing state
CLOSING_THEME = StatusTheme(bg_color="#E74C3C", text_color="#FFFFFF")

ERROR_THEME = StatusTheme(bg_color="#7F8C8D", text_color="#FFFFFF")


def theme_for(resolution: PrimaryStatusResolution) -> StatusTheme:
	"""Colour theme for a resolved primary status."""
	if resolution.mode == PrimaryStatusMode.CLOSING:
		return CLOSING_THEME
	return STATUS_THEMES.get(resolution.theme_code, ERROR_THEME)
