"""Zero-width mention protocol constants.

Single source of truth for symbol tables, frame layout and budgets.
Keep this file stable. Encoders and decoders must remain synchronized.
"""

VERSION = 1

# Channel budget, measured in UTF-16 code units like the chat field itself
CHANNEL_MAX_LENGTH = 1024

# Radix bounds: the digit pool below holds sixteen symbols
DEFAULT_BASE = 16
MIN_BASE = 2
MAX_BASE = 16

# Fixed-width integer fields: [START | version | SEP | payload | SEP | checksum | END]
VERSION_SPACE = 16
CHECKSUM_MODULUS = 1 << 16
CRC_SEED = 0xFFFF

CHECKSUM_CRC16 = "crc16"
CHECKSUM_LENGTH = "length"
CHECKSUM_MODES = (CHECKSUM_CRC16, CHECKSUM_LENGTH)

# Digit symbols, all default-ignorable (Cf/Mn). Order defines digit value.
# U+180E (Mongolian) and U+034F (Hebrew, some scripts) also occur in real text;
# strip_invisible removes them there too; kept to fill sixteen BMP digits.
DIGIT_POOL = (
    "\u200b",  # zero width space
    "\u2060",  # word joiner
    "\u2061",  # function application
    "\u2062",  # invisible times
    "\u2063",  # invisible separator
    "\u2064",  # invisible plus
    "\u206a",  # inhibit symmetric swapping
    "\u206b",  # activate symmetric swapping
    "\u206c",  # inhibit arabic form shaping
    "\u206d",  # activate arabic form shaping
    "\u206e",  # national digit shapes
    "\u206f",  # nominal digit shapes
    "\u180e",  # mongolian vowel separator
    "\u17b4",  # khmer vowel inherent aq
    "\u17b5",  # khmer vowel inherent aa
    "\u034f",  # combining grapheme joiner
)

# Frame markers: VS11-VS13, which have no standardized variation sequences
# (VS1-VS3 do for CJK and math, VS15/VS16 for emoji).
FRAME_START = "\ufe0a"
FRAME_SEP = "\ufe0b"
FRAME_END = "\ufe0c"

# Record wire layout
KIND_TAGS = {"task": b"T", "agent": b"A"}
FIELD_SEP = b"\x1e"
ENTRY_SEP = b"\x1f"
FIELD_ID = b"i"
FIELD_MODE = b"m"
FIELD_EXTRA = b"x"

# Visible label templates
TASK_LABEL = "@Task[{name}]"
AGENT_LABEL = "@Agent[{name}]"
