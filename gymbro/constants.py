"""Константы приложения."""

from typing import Final

# ===== HTTP STATUS CODES =====
HTTP_BAD_REQUEST: Final[int] = 400
HTTP_UNAUTHORIZED: Final[int] = 401
HTTP_INTERNAL_SERVER_ERROR: Final[int] = 500

# ===== TIMEOUTS =====
DEFAULT_API_TIMEOUT: Final[int] = 10

# ===== DURABLE STORAGE =====
TOKEN_STORAGE_KEY: Final[str] = "userToken"
DEFAULT_TOKEN_STORAGE_PATH: Final[str] = "~/.gymbro/session.json"
TOKEN_COOKIE_MAX_AGE: Final[int] = 30 * 24 * 60 * 60
TOKEN_STORAGE_FILE: Final[str] = "file"

# ===== PASSWORD VALIDATION =====
MIN_PASSWORD_LENGTH: Final[int] = 6
MAX_PASSWORD_LENGTH_BYTES: Final[int] = 72

# ===== DEFAULT GOALS =====
DEFAULT_PROTEIN_GOAL: Final[float] = 150
DEFAULT_CALORIES_GOAL: Final[float] = 2000
DEFAULT_WATER_GOAL: Final[float] = 8
DEFAULT_SLEEP_GOAL: Final[float] = 8

# ===== API ENDPOINTS =====
ENDPOINT_HEALTH: Final[str] = "/health"
ENDPOINT_AUTH_LOGIN: Final[str] = "/auth/login"
ENDPOINT_AUTH_SIGNUP: Final[str] = "/auth/signup"
ENDPOINT_AUTH_PROFILE: Final[str] = "/auth/profile"
ENDPOINT_AUTH_GOALS: Final[str] = "/auth/goals"
ENDPOINT_AUTH_PROGRESS: Final[str] = "/auth/progress"
ENDPOINT_TRACK_STREAK: Final[str] = "/track/streak"
ENDPOINT_TRACK_FOOD: Final[str] = "/track/food"
ENDPOINT_TRACK_WATER: Final[str] = "/track/water"
ENDPOINT_TRACK_SLEEP: Final[str] = "/track/sleep"
ENDPOINT_TRACK_WORKOUT: Final[str] = "/track/workout"
ENDPOINT_TRACK_JUNK: Final[str] = "/track/junk"

# ===== ERROR MESSAGES =====
MSG_REQUEST_FAILED: Final[str] = "Request failed"
MSG_NETWORK_ERROR: Final[str] = "Network error: backend is unreachable"
MSG_TIMEOUT: Final[str] = "Request timed out"
MSG_AUTH_REJECTED: Final[str] = "Session expired, please log in again"
MSG_VALIDATION_REJECTED: Final[str] = "Request was rejected"
MSG_SERVER_FAULT: Final[str] = "Server error, please try again later"
MSG_MALFORMED_RESPONSE: Final[str] = "Malformed response from server"
MSG_STORAGE_ERROR: Final[str] = "Failed to access local session storage"

# ===== UI MESSAGES =====
MSG_LOGIN_FAILED: Final[str] = "Login failed"
MSG_SIGNUP_FAILED: Final[str] = "Signup failed"
MSG_EMPTY_FIELDS: Final[str] = "Please fill in all fields"
MSG_INVALID_EMAIL: Final[str] = "Invalid email format"
MSG_PASSWORD_TOO_SHORT: Final[str] = "Password must be at least {length} characters"
MSG_PASSWORD_TOO_LONG: Final[str] = "Password must not exceed {length} bytes"
MSG_PASSWORDS_MISMATCH: Final[str] = "Passwords do not match"
MSG_NOT_AUTHENTICATED: Final[str] = "Please log in first"
MSG_PROFILE_LOAD_FAILED: Final[str] = "Failed to load profile"
MSG_PROFILE_UPDATED: Final[str] = "Profile updated successfully!"
MSG_PROFILE_UPDATE_FAILED: Final[str] = "Failed to update profile"
MSG_GOALS_UPDATED: Final[str] = "Goals updated successfully!"
MSG_GOALS_UPDATE_FAILED: Final[str] = "Failed to update goals"
MSG_DASHBOARD_LOAD_FAILED: Final[str] = "Failed to load data"
MSG_INVALID_NUMBER: Final[str] = "Please enter a positive number"
MSG_EMPTY_ENTRY: Final[str] = "Please enter what you want to log"

# ===== TRACKERS =====
# activity -> (успех, ошибка)
TRACKER_MESSAGES: Final[dict] = {
    "food": ("Food tracked!", "Failed to track food"),
    "water": ("Water tracked!", "Failed to track water"),
    "sleep": ("Sleep tracked!", "Failed to track sleep"),
    "workout": ("Workout tracked!", "Failed to track workout"),
    "junk": ("Junk food tracked!", "Failed to track junk food"),
}

# ===== SESSION STATE KEYS (Streamlit) =====
SESSION_STORE: Final[str] = "session_store"
SESSION_RESTORED: Final[str] = "session_restored"
SESSION_DASHBOARD: Final[str] = "dashboard"
