class ResponseMessages:
    """Standard API response messages"""

    # Success messages
    SUCCESS = "Success"
    CREATED = "Created successfully"
    UPDATED = "Updated successfully"
    DELETED = "Deleted successfully"


# Application Constants
class SquadConstants:
    # Timezone every calendar-day rule is evaluated in
    TIMEZONE_NAME = "Asia/Kolkata"

    # Courts
    PLAYERS_PER_COURT = 4  # doubles

    # Session rules
    MIN_DAYS_IN_ADVANCE = 2
    MAX_SESSION_HOURS = 8
    MAX_TITLE_LENGTH = 200
    MAX_DESCRIPTION_LENGTH = 1000
    MAX_LOCATION_LENGTH = 255

    # Responses lock at midnight this many days before the session
    RESPONSE_CUTOFF_DAYS = 1

    # Comments
    MAX_COMMENT_LENGTH = 1000
    COMMENT_EDIT_WINDOW_HOURS = 24
    MAX_COMMENT_DEPTH = 3

    # Pagination
    DEFAULT_SESSION_LIMIT = 20
    DEFAULT_ACTIVITY_LIMIT = 50
    MAX_PAGE_SIZE = 100

    # Analytics
    MIN_PREDICTIONS_FOR_RELIABILITY = 3
    NEUTRAL_RELIABILITY_SCORE = 50
