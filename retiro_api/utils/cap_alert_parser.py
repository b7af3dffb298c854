from typing import List, Optional, Sequence, Tuple
import logging
import re

from retiro_api.schemas.alert import AlertRecord

logger = logging.getLogger(__name__)

INFO_SECTION_PATTERN = re.compile(r"<info\b[^>]*>([\s\S]*?)</info\s*>", re.IGNORECASE)

# valueName markers used to pick the right <eventCode>/<geocode> pair.
# AEMET sends e.g. "AEMET-Meteoalerta fenomeno" next to "AEMET-Meteoalerta nivel".
PHENOMENON_NAME_MARKERS = ("fenomeno", "fenómeno")
ZONE_NAME_MARKERS = ("zona", "ugc", "zone")


def _tag_pattern(tag: str) -> re.Pattern:
	return re.compile(rf"<{tag}(?:\s[^>]*)?>([^<]*)</{tag}\s*>", re.IGNORECASE)


def _block_pattern(tag: str) -> re.Pattern:
	return re.compile(rf"<{tag}(?:\s[^>]*)?>([\s\S]*?)</{tag}\s*>", re.IGNORECASE)


def select_named_value(candidates: Sequence[Tuple[Optional[str], str]], markers: Sequence[str]) -> Optional[str]:
	"""
	Pick one value out of several (valueName, value) pairs.

	The first pair whose name contains any of the markers (case-insensitive)
	wins. Without such a pair the first candidate is used. Returns None when
	there are no candidates.
	"""
	if not candidates:
		return None
	lowered_markers = [marker.lower() for marker in markers]
	for name, value in candidates:
		if name and any(marker in name.lower() for marker in lowered_markers):
			return value
	return candidates[0][1]


class CAPAlertParser:
	"""Utility class for parsing AEMET CAP XML documents into AlertRecords."""

	@staticmethod
	def extract_tag(xml: str, tag: str) -> Optional[str]:
		"""
		Return the trimmed text of the first <tag>...</tag> element.
		
		Args:
			xml: XML fragment to search
			tag: Element name (matched case-insensitively)
		
		Returns:
			Trimmed text content, or None if the element is not present
		"""
		match = _tag_pattern(tag).search(xml)
		return match.group(1).strip() if match else None

	@staticmethod
	def extract_named_values(xml: str, tag: str) -> List[Tuple[Optional[str], str]]:
		"""
		Collect the (valueName, value) pairs of every <tag> block.
		
		CAP carries typed values as
		<eventCode><valueName>...</valueName><value>...</value></eventCode>;
		blocks without a non-empty value are ignored.
		"""
		pairs: List[Tuple[Optional[str], str]] = []
		for block in _block_pattern(tag).finditer(xml):
			body = block.group(1)
			value = CAPAlertParser.extract_tag(body, "value")
			if not value:
				continue
			pairs.append((CAPAlertParser.extract_tag(body, "valueName"), value))
		return pairs

	@staticmethod
	def parse_info_section(section: str) -> AlertRecord:
		"""Build one AlertRecord from the body of an <info> section."""
		severity = CAPAlertParser.extract_tag(section, "severity")
		return AlertRecord(
			onset=CAPAlertParser.extract_tag(section, "onset"),
			expires=CAPAlertParser.extract_tag(section, "expires"),
			severity=severity.lower() if severity else None,
			phenomenon=select_named_value(
				CAPAlertParser.extract_named_values(section, "eventCode"),
				PHENOMENON_NAME_MARKERS
			),
			zone=select_named_value(
				CAPAlertParser.extract_named_values(section, "geocode"),
				ZONE_NAME_MARKERS
			),
		)

	@staticmethod
	def parse(document: str) -> List[AlertRecord]:
		"""
		Parse one CAP document into one AlertRecord per <info> section.
		
		Args:
			document: CAP XML text
		
		Returns:
			List of AlertRecords in document order (empty if no <info> sections)
		"""
		records = [
			CAPAlertParser.parse_info_section(match.group(1))
			for match in INFO_SECTION_PATTERN.finditer(document)
		]
		logger.debug(f"Parsed {len(records)} info sections from CAP document")
		return records

	@staticmethod
	def parse_all(documents: Sequence[str]) -> List[AlertRecord]:
		"""Parse several documents, keeping document order."""
		records: List[AlertRecord] = []
		for document in documents:
			records.extend(CAPAlertParser.parse(document))
		return records
