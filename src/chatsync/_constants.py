"""Internal constants shared across the library."""

BASE_URL = "http://localhost:5000"
USER_AGENT = "chatsync/1"

# ------------------------------------------------------------------
# Backend endpoints
# ------------------------------------------------------------------

GLOBALS_ENDPOINT = "/api/globals"
HEALTH_ENDPOINT = "/api/health"
AI_VERIFICATION_ENDPOINT = "/api/ai-verification"
CAP_CHECK_ENDPOINT = "/api/cap-check"
START_TRANSCRIBE_ENDPOINT = "/api/start_transcribe"
TRANSCRIBE_ENDPOINT = "/api/transcribe"
END_TRANSCRIBE_ENDPOINT = "/api/end_transcribe"
FACT_CHECK_ENDPOINT = "/api/fact-check"

# ------------------------------------------------------------------
# Timing (seconds)
# ------------------------------------------------------------------

DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_TRANSCRIPT_INTERVAL = 0.5
DEFAULT_REQUEST_TIMEOUT = 10.0

# ------------------------------------------------------------------
# Snapshot defaults
# ------------------------------------------------------------------

DEFAULT_EXPLANATION = (
    "This AI-powered fact-checking system analyzes statements in real-time. "
    "Switch between Person A and Person B to simulate conversations while the "
    "system verifies the truthfulness of each statement."
)

#: Client-local storage key holding the text-to-speech API key.
API_KEY_STORAGE_KEY = "ELEVENLABS_API_KEY"
