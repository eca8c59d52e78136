"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Session dates are stored at local noon so a UTC/local shift never moves them to another day.
SESSION_HOUR = 12

DEFAULT_DB_TIMEOUT_SECONDS = 10
OFFERING_DECIMAL_PLACES = 2

QUARTER_LABELS = {
    1: "Jan-Mar",
    2: "Apr-Jun",
    3: "Jul-Sep",
    4: "Oct-Dec",
}

MSG_REPORT_UPDATED = "Chamada atualizada!"
MSG_REPORT_CREATED = "Nova chamada salva!"

# Column limits from database/schema.sql.
MAX_OFFERING = "9999999999.99"  # DECIMAL(12,2)
MAX_NAME_LENGTH = 200
MAX_REF_LENGTH = 64
