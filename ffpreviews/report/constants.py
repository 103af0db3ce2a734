# constants.py
# Centralized constants for preview generation. Roast thresholds are fixed business rules.

DEFAULT_SLEEPER_BASE_URL = "https://api.sleeper.app/v1"
DEFAULT_OPENAI_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_OUTPUT_PATH = "public/previews.json"
SUMMARY_FILENAME = "preview-info.json"
SPORT = "nfl"

# Fetching
DEFAULT_FETCH_RETRIES = 3
DEFAULT_BACKOFF_MS = 1000
DEFAULT_TIMEOUT_SEC = 20

# Generation
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TEMPERATURE = 0.85
DEFAULT_MAX_TOKENS = 1200
DEFAULT_INTER_CALL_DELAY_SEC = 2.0  # between successive generation calls
DEFAULT_GENERATION_TIMEOUT_SEC = 120  # non-streaming completions reply only when done

# Roast level heuristic
ROAST_AGE_OLD = 32
ROAST_AGE_ANCIENT = 35
ROAST_RANK_DEEP = 1000
ROAST_RANK_BURIED = 2000
ROAST_DEPTH_CHART_BACKUP = 3
ROAST_MAX = 4

# Placeholders
HEALTHY = "Healthy"
UNKNOWN_POSITION = "UNKNOWN"
UNKNOWN_MANAGER = "Unknown Manager"
