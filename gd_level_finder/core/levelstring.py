"""
Level String Decoder

Geometry Dash ships level data as URL-safe base64 of gzip (or zlib)
compressed text. Decoded, the text is `header;object;object;...` where each
object is a flat `key,value,key,value,...` list and key "1" is the object's
type id.
"""
import base64
import binascii
import zlib

from .errors import LevelDataError

# Base64 prefixes of a gzip member and of a default zlib stream
COMPRESSED_PREFIXES = ("H4sI", "eJ")

OBJECT_ID_KEY = "1"


def decode_level_string(data: str) -> str:
    """Return the plain `header;objects...` text for compressed or plain data"""
    data = data.strip()
    if not data:
        raise LevelDataError("Level string is empty")

    if not data.startswith(COMPRESSED_PREFIXES) and ";" in data:
        # Already decoded
        return data

    padded = data + "=" * (-len(data) % 4)
    try:
        compressed = base64.urlsafe_b64decode(padded)
        # 32 + MAX_WBITS: auto-detect gzip or zlib header
        return zlib.decompress(compressed, 32 + zlib.MAX_WBITS).decode("utf-8", errors="replace")
    except (binascii.Error, zlib.error, ValueError) as e:
        raise LevelDataError(f"Could not decode level string: {e}") from e


def parse_object_ids(text: str) -> list[int]:
    """Object type ids in level order; the header section is skipped"""
    if ";" not in text:
        raise LevelDataError("Level string has no object sections")

    ids = []
    for section in text.split(";")[1:]:
        if not section:
            continue
        parts = section.split(",")
        for key, value in zip(parts[0::2], parts[1::2]):
            if key != OBJECT_ID_KEY:
                continue
            try:
                ids.append(int(value))
            except ValueError:
                pass  # Skip objects with a garbled id
            break
    return ids


def object_ids_from_level_string(data: str) -> list[int]:
    """Decode (if needed) and parse a level string into object ids"""
    return parse_object_ids(decode_level_string(data))
