# -------------------------
# POI archive layout
# -------------------------
# A .poi archive is a zip file with three ';'-delimited tables.
# Header names are part of the format; existing archives rely on them.

import os
import zipfile

ARCHIVE_EXTENSION = "poi"

POI_ENTRY = "poi.txt"
POI_TYPE_ENTRY = "poi_type.txt"
POI_PROPERTIES_ENTRY = "poi_properties.txt"

CSV_DELIMITER = ";"
# CRLF makes the csv writer quote any field holding \r or \n
CSV_LINE_TERMINATOR = "\r\n"
TEXT_ENCODING = "utf-8"
# Tolerates a byte order mark left by spreadsheet tools
READ_ENCODING = "utf-8-sig"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Geometry interop
CRS = "EPSG:4326"

# poi_weight is an unsigned 32-bit integer
MAX_WEIGHT = 2**32 - 1

ZIP_COMPRESSION_METHODS = {
    "stored": zipfile.ZIP_STORED,
    "deflated": zipfile.ZIP_DEFLATED,
    "bzip2": zipfile.ZIP_BZIP2,
    "lzma": zipfile.ZIP_LZMA,
}


def _compression_from_env(default: str = "deflated") -> int:
    name = os.environ.get("POIMODEL_ZIP_COMPRESSION", default).strip().lower()
    if name not in ZIP_COMPRESSION_METHODS:
        raise ValueError(
            f"Unknown POIMODEL_ZIP_COMPRESSION: {name}. "
            f"Available: {sorted(ZIP_COMPRESSION_METHODS)}"
        )
    return ZIP_COMPRESSION_METHODS[name]


ZIP_COMPRESSION = _compression_from_env()

LOG_LEVEL = os.environ.get("POIMODEL_LOG_LEVEL", "INFO")
