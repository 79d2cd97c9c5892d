"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SEMESTER_FEE = 11000
SEMESTERS = (1, 2)

FIRST_ROLL_NO = 1001
STUDENT_ID_PREFIX = "UV"

TOTAL_MARKS = 100
PASS_MARKS = 40

DEFAULT_ACADEMIC_YEAR = "2023-2024"

SUBJECTS = ("Mathematics", "Science", "English", "Social Studies", "Hindi")
