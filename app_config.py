"""
Application configuration for the avatar relay.
Loads credentials and runtime settings from the environment / .env file.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# ═══════════════════════════════════════════
# CONVERSATIONAL PLATFORM (Botpress Chat API)
# ═══════════════════════════════════════════

BOTPRESS_WEBHOOK_ID = os.getenv("BOTPRESS_WEBHOOK_ID", "")
BOTPRESS_CHAT_URL = os.getenv("BOTPRESS_CHAT_URL", "https://chat.botpress.cloud").rstrip("/")

# ═══════════════════════════════════════════
# AVATAR STREAMING PLATFORM (HeyGen)
# ═══════════════════════════════════════════

HEYGEN_API_KEY = os.getenv("HEYGEN_API_KEY", "")
HEYGEN_API_URL = os.getenv("HEYGEN_API_URL", "https://api.heygen.com").rstrip("/")

# ═══════════════════════════════════════════
# APP SETTINGS
# ═══════════════════════════════════════════

PORT = int(os.getenv("PORT", 3000))
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
] or ["*"]

# ═══════════════════════════════════════════
# UPSTREAM CALLS
# ═══════════════════════════════════════════

REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", 30))  # seconds

# Fixed wait between posting the user's text and reading the conversation.
BOT_REPLY_DELAY_SECONDS = float(os.getenv("BOT_REPLY_DELAY_SECONDS", 1.5))

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}
