import os
import logging

from utils.env import get_env_str, get_env_float

logger = logging.getLogger(__name__)

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

# -----------------------------------------------------------------------------
# Dotenv loading (LOCAL ONLY)
# -----------------------------------------------------------------------------
# Tests must be deterministic and must NOT implicitly ingest a developer's
# repo-root .env. Deployed environments are configured with real variables.
_APP_STAGE_EARLY = (os.getenv("APP_STAGE") or "").strip().lower()
_FLASK_ENV_EARLY = (os.getenv("FLASK_ENV") or "").strip().lower()

if _APP_STAGE_EARLY not in {"test", "testing"} and _FLASK_ENV_EARLY not in {"test", "testing"}:
    try:
        from dotenv import load_dotenv
        load_dotenv(dotenv_path=os.path.join(BASE_DIR, ".env"), override=False)
    except ImportError:
        logger.debug("[Config] python-dotenv not installed; skipping .env")

# -----------------------------------------------------------------------------
# Environment / Stage
# -----------------------------------------------------------------------------
def _normalize_stage(raw: str) -> str:
    raw = (raw or "").strip().lower()
    if raw in {"prod", "production"}:
        return "production"
    if raw in {"stage", "staging"}:
        return "staging"
    if raw in {"test", "testing"}:
        return "test"
    return "dev"


FLASK_ENV = (os.getenv("FLASK_ENV", "development") or "development").strip().lower()
APP_STAGE = _normalize_stage(os.getenv("APP_STAGE", "dev"))

IS_TEST = APP_STAGE == "test" or FLASK_ENV in {"test", "testing"}
IS_STAGING = APP_STAGE == "staging"
IS_PRODUCTION = APP_STAGE == "production"

LOG_LEVEL = get_env_str("LOG_LEVEL", default="INFO").upper()

# -----------------------------------------------------------------------------
# Instance / Storage Paths
# -----------------------------------------------------------------------------
INSTANCE_DIR = get_env_str("INSTANCE_DIR", default=os.path.join(BASE_DIR, "instance"))

try:
    os.makedirs(INSTANCE_DIR, exist_ok=True)
except OSError as e:
    logger.warning(
        f"[Config] WARNING: Could not create INSTANCE_DIR at {INSTANCE_DIR} ({e}). Falling back to /tmp/instance."
    )
    INSTANCE_DIR = os.path.join("/tmp", "instance")
    os.makedirs(INSTANCE_DIR, exist_ok=True)

REPORTS_OUTPUT_DIR = get_env_str("REPORTS_OUTPUT_DIR", default=os.path.join(INSTANCE_DIR, "reports"))

STATIC_DIR = os.path.join(BASE_DIR, "static")
FONTS_DIR = get_env_str("FONTS_DIR", default=os.path.join(STATIC_DIR, "fonts"))
REPORT_FONT_FAMILY = get_env_str("REPORT_FONT_FAMILY", default="Arial")

# -----------------------------------------------------------------------------
# Storage Backend (save sink for rendered PDFs)
# -----------------------------------------------------------------------------
STORAGE_BACKEND = get_env_str("STORAGE_BACKEND", default="local").strip().lower()

if IS_PRODUCTION and STORAGE_BACKEND != "s3":
    raise RuntimeError("CRITICAL: STORAGE_BACKEND must be 's3' in production.")

S3_BUCKET = get_env_str("S3_BUCKET", default="")
S3_PREFIX = get_env_str("S3_PREFIX", default="")

_region = get_env_str("AWS_REGION", default="us-east-1")
if " " in _region or not _region.replace("-", "").isalnum():
    logger.warning(f"[Config] WARNING: Invalid AWS_REGION detected: '{_region}'. Defaulting to 'us-east-1'.")
    _region = "us-east-1"
AWS_REGION = _region

if STORAGE_BACKEND == "s3" and not S3_BUCKET:
    raise RuntimeError("CRITICAL: S3_BUCKET must be set when STORAGE_BACKEND=s3.")

# -----------------------------------------------------------------------------
# Saved-reports API (optional persistence before rendering)
# -----------------------------------------------------------------------------
REPORTS_API_URL = (get_env_str("REPORTS_API_URL", default="") or "").rstrip("/")
REPORTS_API_TOKEN = get_env_str("REPORTS_API_TOKEN", default="")
REPORTS_API_TIMEOUT = get_env_float("REPORTS_API_TIMEOUT", 10.0)

if (IS_STAGING or IS_PRODUCTION) and REPORTS_API_URL and not REPORTS_API_URL.lower().startswith("https://"):
    raise RuntimeError(f"CRITICAL: REPORTS_API_URL must be HTTPS in {APP_STAGE} stage. Got: {REPORTS_API_URL}")

# -----------------------------------------------------------------------------
# Upload limits
# -----------------------------------------------------------------------------
# Reports carry every photo inline as base64.
MAX_CONTENT_LENGTH = int(get_env_float("MAX_CONTENT_LENGTH_MB", 100) * 1024 * 1024)
