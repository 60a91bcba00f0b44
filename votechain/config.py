"""
VOTECHAIN — Configuration.
Shared settings for the API, the CLI and the message layer.
"""

import os

# Language used when a caller sends no Accept-Language header
DEFAULT_LANG = os.environ.get("VOTECHAIN_LANG", "en")

# Security Configuration
ALLOWED_ORIGINS = os.environ.get(
    "VOTECHAIN_ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173"
).split(",")

# Server
HOST = os.environ.get("VOTECHAIN_HOST", "127.0.0.1")
PORT = int(os.environ.get("VOTECHAIN_PORT", "8000"))

# Logging
LOG_LEVEL = os.environ.get("VOTECHAIN_LOG_LEVEL", "INFO")


def reload() -> None:
    """Re-read every setting from the environment."""
    global DEFAULT_LANG, ALLOWED_ORIGINS, HOST, PORT, LOG_LEVEL

    DEFAULT_LANG = os.environ.get("VOTECHAIN_LANG", "en")
    ALLOWED_ORIGINS = os.environ.get(
        "VOTECHAIN_ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173"
    ).split(",")
    HOST = os.environ.get("VOTECHAIN_HOST", "127.0.0.1")
    PORT = int(os.environ.get("VOTECHAIN_PORT", "8000"))
    LOG_LEVEL = os.environ.get("VOTECHAIN_LOG_LEVEL", "INFO")
