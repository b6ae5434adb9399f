"""All magic values live here — no inline literals anywhere else."""

# Gemini endpoint
GEMINI_API_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "gemini-2.5-flash-preview-09-2025:generateContent"
)
GEMINI_KEY_PARAM = "key"
HTTP_METHOD_POST = "POST"
JSON_HEADERS = {"Content-Type": "application/json"}

# Retry policy defaults. Delays are configured in milliseconds, used in seconds.
DEFAULT_MAX_ATTEMPTS = 4
DEFAULT_TRANSPORT_BASE_DELAY_MS = 800
DEFAULT_RATE_LIMIT_BASE_DELAY_MS = 1000
BACKOFF_MULTIPLIER: float = 2.0
HTTP_TOO_MANY_REQUESTS = 429

# Request
DEFAULT_REQUEST_TIMEOUT: float = 60.0
DEFAULT_TEMPERATURE: float = 0.4
MIN_TEMPERATURE: float = 0.0
MAX_TEMPERATURE: float = 2.0
DEFAULT_MEDIA_TYPE = "application/octet-stream"

ANALYSIS_INSTRUCTION = (
    "Analyze this leaf image and identify the plant species. Provide a detailed "
    "summary including the scientific name, common uses, and key traits. The "
    "output must be clearly structured and provided in English, followed by a "
    "full translation into Hindi, and finally a full translation into Spanish."
)
SYSTEM_INSTRUCTION = (
    "You are an expert botanist and multilingual translator. Respond only with "
    "the requested structured analysis and translations. Do not include any "
    "introductory or concluding remarks."
)

# Log messages
MSG_ANALYZER_STARTING = "Analyzing %s…"
MSG_ATTEMPT = "→ Attempt %d/%d %s"
MSG_RATE_LIMITED = "Rate limited (HTTP %s), retrying in %.1fs"
MSG_TRANSPORT_RETRY = "Request failed (%s), retrying in %.1fs (attempt %d)"
MSG_REQUEST_OK = "✓ Response received after %d attempt(s)"
MSG_REQUEST_FAILED = "✗ Request failed after %d attempt(s): %s"
MSG_MALFORMED_LOG = "AI response structure: %s"
MSG_ANALYSIS_FAILED_LOG = "API call error"
MSG_ASSET_UNREADABLE_LOG = "Asset encoding failed"
MSG_MALFORMED_RESPONSE_LOG = "Malformed response: %s"

# User-facing messages
MSG_ERR_NO_ASSET = "Please upload a leaf image first."
MSG_ERR_ASSET_UNREADABLE = "Could not read the image — please choose another file."
MSG_ERR_MALFORMED = "AI did not return proper text. Check logs for API response structure."
MSG_ERR_REQUEST_FAILED = (
    "Failed to analyze. Please check your API configuration or network connection."
)
MSG_USAGE = "Usage: leaflens <image> [<image> ...]"
