"""Fixed strings and values for the chat session client."""

# Remote dialogue endpoint used when CHAT_ENDPOINT_URL is not set
DEFAULT_ENDPOINT_URL = "https://obz7hjinr4.execute-api.ap-south-1.amazonaws.com/dev"

# Session attributes sent on every turn
DEFAULT_BE_LIMIT = 5
END_SESSION_TEXT = "End Session"

SESSION_ID_PREFIX = "session-"
SESSION_ID_SUFFIX_LENGTH = 9
SESSION_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

# Transcript wording
SESSION_CREATED_TEMPLATE = "Session created: {session_id}"
WARNING_MARKER = "⚠️"
CONNECTION_ERROR_MARKER = "❌ Connection Error"
NO_RESPONSE_TEXT = "No response received"
SESSION_ENDED_TEXT = "Session ended"
CONNECTION_ERROR_TEXT = (
    f"{CONNECTION_ERROR_MARKER}: Unable to send message. "
    "Please check your internet connection and try again."
)
FORCED_TERMINATION_TEXT = f"{WARNING_MARKER} Error ending session - forcing local session termination"

# Gateway fallbacks
OFFLINE_END_SESSION_TEXT = "Session ended (offline mode - API unavailable)"
UNREACHABLE_SERVICE_TEXT = (
    "I apologize, but I'm currently unable to connect to the chat service. "
    "This might be due to network issues or server maintenance. Please try again later."
)
UNKNOWN_ERROR_TEXT = "Unknown error"

# Emphasis tags rewritten before display
MARKUP_REPLACEMENTS = (
    ("<b>", "<strong>"),
    ("</b>", "</strong>"),
    ("<i>", "<em>"),
    ("</i>", "</em>"),
)
