# --- Events ---
EVENT_TRAINING = "TRAINING"
EVENT_MATCH = "MATCH"
EVENT_MEETING = "MEETING"
EVENT_OTHER = "OTHER"
EVENT_TYPES = (EVENT_TRAINING, EVENT_MATCH, EVENT_MEETING, EVENT_OTHER)

# --- Event / match status (kept identical on both rows for MATCH events) ---
STATUS_SCHEDULED = "SCHEDULED"
STATUS_IN_PROGRESS = "IN_PROGRESS"
STATUS_COMPLETED = "COMPLETED"
STATUS_CANCELLED = "CANCELLED"
STATUS_POSTPONED = "POSTPONED"
EVENT_STATUSES = (
    STATUS_SCHEDULED,
    STATUS_IN_PROGRESS,
    STATUS_COMPLETED,
    STATUS_CANCELLED,
    STATUS_POSTPONED,
)
TERMINAL_STATUSES = (STATUS_COMPLETED, STATUS_CANCELLED)

# --- Attendance ---
ATTENDANCE_PLANNED = "PLANNED"
ATTENDANCE_ATTENDED = "ATTENDED"
ATTENDANCE_ABSENT = "ABSENT"
ATTENDANCE_EXCUSED = "EXCUSED"
ATTENDANCE_STATUSES = (ATTENDANCE_PLANNED, ATTENDANCE_ATTENDED, ATTENDANCE_ABSENT, ATTENDANCE_EXCUSED)

# --- Players ---
ALL_POSITIONS = ("POINT_GUARD", "SHOOTING_GUARD", "SMALL_FORWARD", "POWER_FORWARD", "CENTER")

# Fallback formats tried after ISO-8601 when parsing event times
CUSTOM_DATETIME_FORMATS = ("%d.%m.%Y %H:%M", "%d.%m.%Y")

# Free-text opponent marker appended to MATCH event descriptions
AWAY_TEAM_LABEL = "Away team"
