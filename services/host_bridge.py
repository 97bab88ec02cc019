"""
Host messaging-platform bridge (Telegram Mini App).

The assistant only needs four capabilities from its host: user data,
forwarded message text, alerts and haptic feedback. All of them are
best-effort: a missing host, a missing method or a failing call is a no-op.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qs, unquote, urlsplit

logger = logging.getLogger(__name__)


class HostBridge:
    """Host without any capabilities; every call is a no-op"""

    def get_user_data(self) -> Optional[Dict[str, Any]]:
        return None

    def get_forwarded_message_text(self) -> Optional[str]:
        return None

    def show_alert(self, message: str) -> None:
        return None

    def vibrate(self) -> None:
        return None


def _decode(value: str) -> str:
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        logger.warning("Could not decode start parameter, using it as is")
        return value


def _start_param(query: str) -> Optional[str]:
    values = parse_qs(query).get("start")
    return values[0] if values else None


def extract_message_text(launch_url: str, init_data: Optional[Dict[str, Any]] = None) -> Optional[str]:
    """
    Find forwarded recipe text in the Mini App launch context.

    Sources in order: ?start= in the URL, start= in the URL fragment,
    initData.text, initData.start_param.
    """
    init_data = init_data or {}
    parts = urlsplit(launch_url or "")

    start = _start_param(parts.query)
    if start:
        return _decode(start)

    start = _start_param(parts.fragment)
    if start:
        return _decode(start)

    text = init_data.get("text")
    if isinstance(text, str) and text:
        return text

    start_param = init_data.get("start_param")
    if isinstance(start_param, str) and start_param:
        return _decode(start_param)

    return None


class TelegramLaunchBridge(HostBridge):
    """
    Bridge built from what the Mini App front-end reports at launch.

    Alerts and haptic requests are queued for the front-end to replay
    through Telegram.WebApp.showAlert / HapticFeedback.
    """

    def __init__(self, launch_url: str = "", init_data: Optional[Dict[str, Any]] = None):
        self.launch_url = launch_url
        self.init_data = init_data or {}
        self.alerts: List[str] = []
        self.vibrations = 0

    def get_user_data(self) -> Optional[Dict[str, Any]]:
        user = self.init_data.get("user")
        return user if isinstance(user, dict) else None

    def get_forwarded_message_text(self) -> Optional[str]:
        return extract_message_text(self.launch_url, self.init_data)

    def show_alert(self, message: str) -> None:
        self.alerts.append(message)

    def vibrate(self) -> None:
        self.vibrations += 1

    def drain(self) -> Tuple[List[str], int]:
        """Return and forget queued alerts and haptic requests"""
        alerts, vibrations = self.alerts, self.vibrations
        self.alerts, self.vibrations = [], 0
        return alerts, vibrations


class SafeHost:
    """Wraps any host object so that missing or failing capabilities degrade to no-ops"""

    def __init__(self, host: Any = None):
        self.host = host

    def _call(self, name: str, *args: Any) -> Any:
        method = getattr(self.host, name, None)
        if not callable(method):
            return None
        try:
            return method(*args)
        except Exception as e:
            logger.warning(f"Host call {name} failed: {e!r}")
            return None

    def get_user_data(self) -> Optional[Dict[str, Any]]:
        return self._call("get_user_data")

    def get_forwarded_message_text(self) -> Optional[str]:
        return self._call("get_forwarded_message_text")

    def show_alert(self, message: str) -> None:
        self._call("show_alert", message)

    def vibrate(self) -> None:
        self._call("vibrate")
