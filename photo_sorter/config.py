"""
Configuration constants for the photo sorter.
"""

# --- File Type Definitions ---
# Types are lowercase extensions without the leading dot.
JPEG_TYPES = {'jpeg', 'jpg', 'jpe'}
HEIC_TYPES = {'heic'}

# Never moved and never opened for metadata extraction.
SKIP_TYPES = {'exe', 'bat', 'ini', 'dropbox', 'app'}

# --- Metadata Parsing ---
# EXIF format is "YYYY:MM:DD HH:MM:SS", no zone information
EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"

# HEIC Exif items usually start with this preamble ahead of the TIFF header
EXIF_PREAMBLE = b"Exif\x00\x00"

# exifread stores these alongside real tags
NON_TAG_KEYS = {'JPEGThumbnail', 'TIFFThumbnail'}

# --- Organization ---
DIR_MODE = 0o750
MISC_DIR = "misc"
DEFAULT_OUTPUT_DIRNAME = "sorted"
YEAR_DIR_PATTERN = "{year:04d}"
DAY_DIR_PATTERN = "{year:04d}-{month:02d}-{day:02d}"
COLLISION_PATTERN = "{stem}-{counter}{ext}"
