"""Error codes and user-friendly messages.

Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the user may simply try again

Codes are grouped by failure kind: AUTH_* (authentication), DB_* (the
row store rejected a query) and VAL_*/API_* (local validation).
"""

ERROR_CATALOG: dict[str, dict] = {
    "AUTH_001": {
        "code": "AUTH_001",
        "message": "Invalid email or password",
        "user_message": "Incorrect email or password.",
        "suggestion": "Check your credentials and sign in again.",
        "retry_allowed": True,
    },
    "AUTH_002": {
        "code": "AUTH_002",
        "message": "Missing, invalid or expired token",
        "user_message": "You need to sign in to continue.",
        "suggestion": "Sign in again and retry.",
        "retry_allowed": True,
    },
    "AUTH_003": {
        "code": "AUTH_003",
        "message": "Email already registered",
        "user_message": "An account with this email already exists.",
        "suggestion": "Sign in instead, or use a different email address.",
        "retry_allowed": False,
    },
    "AUTH_004": {
        "code": "AUTH_004",
        "message": "User account is deactivated",
        "user_message": "This account has been deactivated.",
        "suggestion": "Contact the household owner to reactivate it.",
        "retry_allowed": False,
    },
    "DB_001": {
        "code": "DB_001",
        "message": "Database query failed",
        "user_message": "We couldn't save your changes.",
        "suggestion": "Please try again in a few moments.",
        "retry_allowed": True,
    },
    "DB_002": {
        "code": "DB_002",
        "message": "Resource already exists",
        "user_message": "This record already exists.",
        "suggestion": "Refresh the page to see the current data.",
        "retry_allowed": False,
    },
    "HH_001": {
        "code": "HH_001",
        "message": "User has no household membership",
        "user_message": "We couldn't find your household.",
        "suggestion": "Check your sign-up settings and try again.",
        "retry_allowed": True,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "No statement file provided",
        "user_message": "Please choose a statement file.",
        "suggestion": "Select the CSV exported from your card provider.",
        "retry_allowed": True,
    },
    "VAL_002": {
        "code": "VAL_002",
        "message": "Statement year or month missing or out of range",
        "user_message": "Please check the file and the year/month.",
        "suggestion": "Enter the statement year and a month between 1 and 12.",
        "retry_allowed": True,
    },
    "VAL_003": {
        "code": "VAL_003",
        "message": "No parsable rows in statement",
        "user_message": "No valid statement rows were found.",
        "suggestion": "Make sure the file is the card provider's CSV export.",
        "retry_allowed": False,
    },
    "VAL_004": {
        "code": "VAL_004",
        "message": "Comment content is empty",
        "user_message": "Please write a comment first.",
        "suggestion": "Enter some text and submit again.",
        "retry_allowed": True,
    },
    "VAL_005": {
        "code": "VAL_005",
        "message": "Statement file could not be decoded",
        "user_message": "This file doesn't look like a text CSV.",
        "suggestion": "Upload the CSV as downloaded (UTF-8 or Shift-JIS).",
        "retry_allowed": False,
    },
    "API_001": {
        "code": "API_001",
        "message": "Invalid file type uploaded",
        "user_message": "Only CSV files are supported.",
        "suggestion": "Upload the statement with Content-Type text/csv.",
        "retry_allowed": False,
    },
    "API_002": {
        "code": "API_002",
        "message": "File size exceeds maximum limit",
        "user_message": "The file is too large.",
        "suggestion": "Upload a single month's statement.",
        "retry_allowed": False,
    },
    "API_003": {
        "code": "API_003",
        "message": "Statement not found",
        "user_message": "We couldn't find this statement.",
        "suggestion": "Refresh the statement list and try again.",
        "retry_allowed": False,
    },
    "API_004": {
        "code": "API_004",
        "message": "Transaction not found",
        "user_message": "We couldn't find this transaction.",
        "suggestion": "Refresh and try again.",
        "retry_allowed": False,
    },
    "API_005": {
        "code": "API_005",
        "message": "Invalid year-month key",
        "user_message": "That month isn't valid.",
        "suggestion": "Use the YYYY-MM format, e.g. 2025-01.",
        "retry_allowed": False,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Unknown codes map to a generic, retryable definition.
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]
