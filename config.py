# config.py
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

COMPANY_NAME = "SRI CHAKRI TRADERS"

LOCAL_HOSTS = ("localhost", "127.0.0.1")
LOCAL_API_BASE_URL = os.getenv("LOCAL_API_BASE_URL", "http://localhost:4000")
DEFAULT_API_BASE_URL = "https://pi-generator-server-05-1.onrender.com"
API_BASE_URL = os.getenv("API_BASE_URL")

GENERATE_PDF_PATH = "/api/generate-pdf"
GENERATE_AND_EMAIL_PDF_PATH = "/api/generate-and-email-pdf"

# how long to wait for the document service to start answering
REQUEST_TIMEOUT_MS = int(os.getenv("REQUEST_TIMEOUT_MS", "90000"))

LOGO_PATH = Path(os.getenv("LOGO_PATH", str(BASE_DIR / "static" / "logo.png")))

APP_USERNAME = os.getenv("APP_USERNAME", "PIGENERATOR")
APP_PASSWORD = os.getenv("APP_PASSWORD", "PI@GENERATOR")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", str(BASE_DIR / "logs"))
LOG_FILE = os.getenv("LOG_FILE", "pi_generator.log")


def _hostname(host: Optional[str]) -> str:
    """
    "localhost:8501" -> "localhost", "[::1]:8501" -> "[::1]"
    """
    if not host:
        return ""
    host = host.strip().lower()
    if host.startswith("["):
        return host.split("]", 1)[0] + "]"
    return host.split(":", 1)[0]


def resolve_api_base_url(host: Optional[str], remote_url: Optional[str] = None) -> str:
    """
    Pick the document service for the host the app is being served from.
    Local development talks to a local server; everything else goes to the
    configured remote, or the hosted fallback when nothing is configured.
    """
    if _hostname(host) in LOCAL_HOSTS:
        base = LOCAL_API_BASE_URL
    else:
        base = remote_url if remote_url is not None else API_BASE_URL
        base = base or DEFAULT_API_BASE_URL
    return base.rstrip("/")
