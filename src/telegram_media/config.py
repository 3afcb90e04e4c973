# telegram_media/config.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

import os

# Configuration constants loaded from environment variables


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    return default


# When enabled, an unknown sticker pack reference kind fails the decode instead
# of falling back to an empty short name.
STRICT_PACK_REFERENCES: bool = _env_flag(
    "TELEGRAM_MEDIA_STRICT_PACK_REFERENCES", False
)

# Log level used by the command-line tool
LOG_LEVEL: str = os.getenv("TELEGRAM_MEDIA_LOG_LEVEL", "INFO").strip().upper() or "INFO"
