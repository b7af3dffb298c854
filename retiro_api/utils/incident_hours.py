"""
Normalisation of the free-text incident hours the Madrid feed publishes.
"""
import re

TIME_TOKEN = r"(?:[01]?\d|2[0-4]):[0-5]\d"
BARE_TIME_RANGE = re.compile(rf"^({TIME_TOKEN})\s+({TIME_TOKEN})$")


def format_incident_hours(value: str) -> str:
	"""
	Normalise an incident hour range into "HH:mm - HH:mm".
	
	Handles a leading "de", the "a"/"to" connectors, dash variants and bare
	"HH:mm HH:mm" pairs. Anything else is returned whitespace-collapsed.
	
	Examples:
		"de 14:00 a 20:00" -> "14:00 - 20:00"
		"14:00–20:00"      -> "14:00 - 20:00"
	"""
	normalized = re.sub(r"\s+", " ", value.strip())
	without_prefix = re.sub(r"^de\s+", "", normalized, flags=re.IGNORECASE)
	standardized = re.sub(r"\s+(?:a|to)\s+", " - ", without_prefix, flags=re.IGNORECASE)
	standardized = re.sub(r"\s*[–—-]\s*", " - ", standardized)

	if " - " in standardized:
		return standardized

	bare_range = BARE_TIME_RANGE.match(standardized)
	if bare_range:
		return f"{bare_range.group(1)} - {bare_range.group(2)}"

	return standardized
