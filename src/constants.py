"""All magic values live here — no inline literals anywhere else."""

# Oracle backends
PROVIDER_OPENAI = "openai"
PROVIDER_CLAUDE = "claude"
PROVIDERS = (PROVIDER_OPENAI, PROVIDER_CLAUDE)

OPENAI_VISION_MODEL = "gpt-4o"
CLAUDE_VISION_MODEL = "claude-opus-4-6"
CLAUDE_MAX_TOKENS = 1024

# Sent verbatim with every submission, before the images.
MATCH_PROMPT = """
Compare the reference photo to the group photos.
Return ONLY the indices (1-based) of images where the same person is present,
as a pure JSON array, e.g. [1,3,4].
No extra text, no explanations, no keys, just the array.
Indices refer ONLY to the GROUP photos (not the reference).
If the reference photo is also present in the group, include its GROUP index.
"""

# First bracketed run of digits, commas and whitespace in free-form model text.
INDEX_ARRAY_PATTERN = r"\[[\d,\s]+\]"

# ASCII decimal or exponent notation only.
NUMERIC_STRING_PATTERN = r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?"

DEFAULT_MIME_TYPE = "application/octet-stream"

# Log messages
MSG_APP_STARTING = "Starting Photo Matcher…"
MSG_SUBMITTING = "Comparing reference against %d group photo(s) via %s"
MSG_ORACLE_DONE = "Oracle replied in %.1fs"
MSG_ORACLE_FAILED = "Oracle request failed"
MSG_NORMALIZED = "Normalized indices: %s"
MSG_DIRECT_PARSE_FAILED = "Model output is not JSON, trying bracket extraction"
MSG_FALLBACK_PARSE_FAILED = "Bracket extraction parse failed: %s"
MSG_NO_ARRAY_FOUND = "No index array found in model output"

# User-facing messages
MSG_MISSING_INPUT = "Please provide API key, a reference photo, and group photos."
MSG_BUSY = "A comparison is already running — wait for it to finish."
MSG_UNKNOWN_PROVIDER = "Unknown provider: %s (expected one of: %s)"
MSG_NO_MATCHES = "No matching group photos."
MSG_MATCHES = "%d of %d group photo(s) match the reference."
MSG_REQUEST_ERROR = "Request failed: %s"

# UI
APP_TITLE = "📸 Photo Matcher"
LABEL_API_KEY = "API Key"
LABEL_PROVIDER = "Provider"
LABEL_REFERENCE = "Reference Photo"
LABEL_GROUP = "Group Photos"
LABEL_COMPARE = "🔍 Compare"
LABEL_COMPARING = "⏳ Comparing..."
LABEL_MODEL_OUTPUT = "Model Output"
IMAGE_TYPES = ["png", "jpg", "jpeg", "gif", "webp"]
GRID_COLUMNS = 4
MARKER_MATCH = "✓"
MARKER_NO_MATCH = "✗"
COLOR_MATCH = "green"
COLOR_NO_MATCH = "red"
LABEL_NORMALIZED_INDICES = "Normalized indices: [%s]"
CAPTION_IMAGE_MARKED = "Image %d %s"
IMAGE_CARD_HTML = (
    '<div style="position: relative; border: 2px solid {color}; '
    'border-radius: 12px; overflow: hidden; text-align: center;">'
    '<img src="{uri}" style="width: 100%; height: auto; display: block;"/>'
    '<div style="position: absolute; top: 8px; right: 8px; background: {color}; '
    'color: white; border-radius: 50%; width: 28px; height: 28px; display: flex; '
    'align-items: center; justify-content: center; font-weight: bold;">'
    "{marker}</div>"
    '<p style="margin: .5rem 0;">{caption}</p>'
    "</div>"
)

# Streamlit session keys
KEY_MATCHER = "matcher"
KEY_BUSY = "busy"
KEY_RESULT = "result"
KEY_SUBMISSION = "submission"
KEY_ERROR = "error"
KEY_COMPARE = "compare"
