import os

# Base directory
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Paths
LOG_FILE = os.getenv("CBT_LOG_FILE", os.path.join(BASE_DIR, "launch.log"))

# Server
DEFAULT_HOST = os.getenv("HOST", "127.0.0.1")
DEFAULT_PORT = int(os.getenv("PORT", "8000"))

# Exam
EXAM_DURATION_SECONDS = int(os.getenv("CBT_EXAM_DURATION", "1800"))   # 30 min
SAMPLE_SIZE = int(os.getenv("CBT_SAMPLE_SIZE", "20"))
FREE_DAILY_EXAM_LIMIT = int(os.getenv("CBT_FREE_DAILY_LIMIT", "3"))
VALIDATE_OPTION_KEYS = os.getenv("CBT_VALIDATE_OPTION_KEYS", "0").lower() in ("1", "true", "yes")
CBT_COURSE_PREFIX = "GSS"   # CBT practice is offered for GSS courses only
TIME_WARNING_SECONDS = 300  # timer turns red under 5 min

# Unset -> nondeterministic sampling
_seed = os.getenv("CBT_RANDOM_SEED")
RANDOM_SEED = int(_seed) if _seed else None

# Client sessions
SESSION_TTL = int(os.getenv("CBT_SESSION_TTL", "3600"))   # 1 hour
CLEANUP_INTERVAL = 300                                     # 5 min
