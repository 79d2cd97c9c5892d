SECRET_KEY = "test-secret"

STORAGE_BACKEND = "memory"
DB_CONFIG = None

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "1234"

SEMESTER_FEE = 11000
ACADEMIC_YEAR = "2023-2024"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
