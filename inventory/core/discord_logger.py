import logging
import time

import requests

from .settings import settings

logger = logging.getLogger("inventory")

# Last send time per level, used to throttle repeated alerts
_last_alert_time: dict[str, float] = {}
FLOOD_INTERVAL = 20  # seconds between alerts of the same level

LEVEL_EMOJI = {
    "INFO": "ℹ️",
    "WARN": "⚠️",
    "ERROR": "🔥",
    "CRITICAL": "💀",
}


def send_discord_alert(message: str, level: str = "INFO", webhook_url: str | None = None) -> bool:
    """
    Posts a short alert to the configured Discord webhook.

    Returns True when a request was sent. Alerts of a level already sent
    within FLOOD_INTERVAL seconds are dropped.
    """
    url = webhook_url or settings.DISCORD_WEBHOOK_URL
    if not url:
        return False

    now = time.time()
    if now - _last_alert_time.get(level, 0) < FLOOD_INTERVAL:
        return False
    _last_alert_time[level] = now

    emoji = LEVEL_EMOJI.get(level, "⚡")
    payload = {"content": f"{emoji} **[{level}] Inventory:** {message}"}

    try:
        requests.post(url, json=payload, timeout=2)
    except requests.RequestException as e:
        logger.debug(f"Discord alert not delivered: {e}")
        return False
    return True
