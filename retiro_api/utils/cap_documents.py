"""
Extraction of CAP alert documents from the raw AEMET warnings payload.

The payload is normally a tar archive of CAP XML files, but the declared
content type does not reliably say so, so the archive is tried first and
the raw text is scanned as a fallback.
"""
from typing import List, Optional, Union
import logging
import re

from retiro_api.exceptions import UnexpectedPayloadError
from retiro_api.utils.tar_reader import read_tar_entries

logger = logging.getLogger(__name__)

CAP_DOCUMENT_PATTERN = re.compile(
	r"(?:<\?xml[^>]*\?>\s*)?<alert\b[\s\S]*?</alert\s*>",
	re.IGNORECASE
)

BytesLike = Union[bytes, bytearray, memoryview]


def find_cap_documents(text: str) -> List[str]:
	"""Return every <alert>...</alert> document in the text, in order."""
	return [match.group(0) for match in CAP_DOCUMENT_PATTERN.finditer(text)]


def extract_documents_from_tar(buffer: BytesLike) -> List[str]:
	"""
	Return the CAP documents of every tar entry, in entry order and then in
	document order within each entry. Entries without documents are skipped.
	Returns an empty list when the buffer is not an archive.
	"""
	documents: List[str] = []
	for entry in read_tar_entries(bytes(buffer)):
		found = find_cap_documents(entry.text())
		if not found:
			logger.debug(f"Skipping tar entry '{entry.name}' without CAP documents")
			continue
		documents.extend(found)
	return documents


def _is_blank(text: str) -> bool:
	return not text.replace("\0", "").strip()


def extract_cap_documents(raw: BytesLike, content_type: Optional[str] = None) -> List[str]:
	"""
	Extract CAP alert documents from a warnings payload.
	
	Args:
		raw: Response body as bytes
		content_type: Declared Content-Type header (informational only)
	
	Returns:
		List of CAP XML documents; empty if the payload is blank
	
	Raises:
		UnexpectedPayloadError: If the payload has content but no CAP documents
	"""
	documents = extract_documents_from_tar(raw)
	if documents:
		logger.debug(f"Extracted {len(documents)} CAP documents from tar payload ({content_type})")
		return documents
	
	text = bytes(raw).decode("utf-8", errors="replace")
	documents = find_cap_documents(text)
	if documents:
		logger.debug(f"Extracted {len(documents)} CAP documents from plain payload ({content_type})")
		return documents
	
	if _is_blank(text):
		return []
	
	preview = text.replace("\0", "").strip()[:120]
	raise UnexpectedPayloadError(content_type, preview)
