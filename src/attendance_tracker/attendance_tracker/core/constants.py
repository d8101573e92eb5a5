"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATE_FORMAT = "%Y-%m-%d"

CSV_FILENAME = "attendance_records.csv"
CSV_COLUMNS = {
    "employee_id": "Employee ID",
    "employee_name": "Employee Name",
    "attendance_type": "Attendance Type",
    "date": "Date",
}

DEFAULT_DB_PORT = 3306
DEFAULT_POOL_NAME = "attendance_tracker"
