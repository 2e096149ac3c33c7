"""
Application configuration and settings
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

class Settings:
    # App settings
    APP_NAME = "Legal Document Simplifier"
    VERSION = "1.0.0"

    # CORS
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "https://legaldocument.vercel.app").split(",")

    # LLM provider: "gemini", "claude" or "mock"
    LLM_PROVIDER = os.getenv("LLM_PROVIDER", "gemini").lower()

    # API Keys
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
    CLAUDE_API_KEY = os.getenv("CLAUDE_API_KEY")
    CLAUDE_MODEL = os.getenv("CLAUDE_MODEL", "claude-sonnet-4-20250514")

    # Oracle calls are single-shot, no retries
    LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))
    LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "4096"))

    # Input limits
    MAX_TEXT_LENGTH = 10000
    MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB
    ALLOWED_UPLOAD_TYPES = ("application/pdf", "text/plain")
    TRUNCATION_MARKER = "..."

    # Temporary storage for uploads, emptied after every request
    UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")

    # Server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "3000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Instantiate settings
settings = Settings()
