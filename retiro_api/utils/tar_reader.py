"""
Minimal reader for the ustar archives AEMET serves its CAP files in.

Only the subset the feed uses is supported: 512-byte header blocks, an
octal size field, content padded to the block size, and an all-zero
header block as end-of-archive marker. Anything else is reported as
"not an archive" by returning an empty list.
"""
from dataclasses import dataclass
from typing import List, NamedTuple, Optional
import logging

logger = logging.getLogger(__name__)

BLOCK_SIZE = 512


class HeaderField(NamedTuple):
	offset: int
	width: int
	kind: str  # "text" or "octal"


HEADER_FIELDS = {
	"name": HeaderField(offset=0, width=100, kind="text"),
	"size": HeaderField(offset=124, width=12, kind="octal"),
	"typeflag": HeaderField(offset=156, width=1, kind="text"),
}

# Regular file typeflags (a legacy NUL flag reads as "")
REGULAR_TYPEFLAGS = ("0", "", "7")


@dataclass(frozen=True)
class TarEntry:
	name: str
	size: int
	content: bytes

	def text(self) -> str:
		return self.content.decode("utf-8", errors="replace")


def _raw_field(header: bytes, field: HeaderField) -> str:
	raw = header[field.offset:field.offset + field.width]
	return raw.split(b"\0", 1)[0].decode("ascii", errors="replace")


def _parse_octal(value: str) -> Optional[int]:
	value = value.strip()
	if not value or any(ch not in "01234567" for ch in value):
		return None
	return int(value, 8)


def read_header_field(header: bytes, field_name: str):
	"""
	Decode one header field according to HEADER_FIELDS.

	Returns a str for text fields, and an int (or None when the field is not
	a valid non-negative octal number) for octal fields.
	"""
	field = HEADER_FIELDS[field_name]
	raw = _raw_field(header, field)
	if field.kind == "octal":
		return _parse_octal(raw)
	return raw


def _padded(size: int) -> int:
	return ((size + BLOCK_SIZE - 1) // BLOCK_SIZE) * BLOCK_SIZE


def read_tar_entries(buffer: bytes) -> List[TarEntry]:
	"""
	Walk the header blocks of a tar buffer and return its regular file
	entries in order. Directories, links and metadata entries are walked
	over but not returned.
	
	Args:
		buffer: Raw bytes that may or may not be a tar archive
	
	Returns:
		List of TarEntry, or an empty list if the buffer is too short, has a
		malformed size field, overruns its own length, or never reaches the
		end-of-archive block. Partial results are never returned.
	"""
	data = bytes(buffer)
	if len(data) < BLOCK_SIZE:
		return []
	
	entries: List[TarEntry] = []
	offset = 0
	while offset + BLOCK_SIZE <= len(data):
		header = data[offset:offset + BLOCK_SIZE]
		if not any(header):
			return entries
		
		size = read_header_field(header, "size")
		if size is None:
			logger.debug(f"Invalid tar size field at offset {offset}, treating buffer as non-archive")
			return []
		
		content_start = offset + BLOCK_SIZE
		next_offset = content_start + _padded(size)
		if next_offset > len(data):
			logger.debug(f"Tar entry at offset {offset} overruns buffer ({next_offset} > {len(data)})")
			return []
		
		typeflag = read_header_field(header, "typeflag")
		if typeflag in REGULAR_TYPEFLAGS:
			entries.append(TarEntry(
				name=read_header_field(header, "name"),
				size=size,
				content=data[content_start:content_start + size]
			))
		else:
			logger.debug(f"Skipping non-file tar entry (typeflag {typeflag!r}) at offset {offset}")
		offset = next_offset
	
	logger.debug("No end-of-archive block found, treating buffer as non-archive")
	return []
