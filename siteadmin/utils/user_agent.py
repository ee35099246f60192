"""User agent parsing for browser and OS display names."""

import re

from siteadmin.core.config import BrowserList

# Checked in order; first match wins
_BROWSER_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"MSIE"), "Internet Explorer"),
    (re.compile(r"Edge?/\d+"), "Edge"),
    (re.compile(r"OPR[/\s]\d+\.\d+|Opera[/\s]\d+\.\d+"), "Opera"),
    (re.compile(r"Chrome[/\s]\d+\.\d+"), "Chrome"),
    (re.compile(r"Firefox[/\s]\d+"), "Firefox"),
    (re.compile(r"Safari[/\s]\d+\.\d+"), "Safari"),
    (re.compile(r"UCWEB|UCBrowser"), "UC Browser"),
    (re.compile(r"Iceape"), "IceApe Browser"),
    (re.compile(r"maxthon", re.IGNORECASE), "Maxthon Browser"),
    (re.compile(r"konqueror", re.IGNORECASE), "Konqueror Browser"),
    (re.compile(r"NetFront"), "NetFront Browser"),
    (re.compile(r"Midori"), "Midori Browser"),
]

_OS_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"windows nt 10", re.IGNORECASE), "Windows 10"),
    (re.compile(r"windows nt 6\.3", re.IGNORECASE), "Windows 8.1"),
    (re.compile(r"windows nt 6\.2", re.IGNORECASE), "Windows 8"),
    (re.compile(r"windows nt 6\.1", re.IGNORECASE), "Windows 7"),
    (re.compile(r"windows nt 6\.0", re.IGNORECASE), "Windows Vista"),
    (re.compile(r"windows nt 5\.2", re.IGNORECASE), "Windows Server 2003"),
    (re.compile(r"windows nt 5\.1|windows xp", re.IGNORECASE), "Windows XP"),
    (re.compile(r"windows nt 5\.0", re.IGNORECASE), "Windows 2000"),
    (re.compile(r"windows me", re.IGNORECASE), "Windows ME"),
    (re.compile(r"win98", re.IGNORECASE), "Windows 98"),
    (re.compile(r"win95", re.IGNORECASE), "Windows 95"),
    (re.compile(r"win16", re.IGNORECASE), "Windows 3.11"),
    (re.compile(r"windows", re.IGNORECASE), "Windows"),
    (re.compile(r"iphone", re.IGNORECASE), "Mac IOS"),
    (re.compile(r"ipod", re.IGNORECASE), "iPod"),
    (re.compile(r"ipad", re.IGNORECASE), "iPad"),
    (re.compile(r"android", re.IGNORECASE), "Android"),
    (re.compile(r"blackberry", re.IGNORECASE), "BlackBerry"),
    (re.compile(r"mac_powerpc", re.IGNORECASE), "Mac OS 9"),
    (re.compile(r"macintosh|mac os x", re.IGNORECASE), "Mac OS X"),
    (re.compile(r"SMART-TV", re.IGNORECASE), "Smart TV"),
    (re.compile(r"webos", re.IGNORECASE), "Mobile"),
    (re.compile(r"ubuntu", re.IGNORECASE), "Ubuntu"),
    (re.compile(r"linux", re.IGNORECASE), "Linux"),
]

UNKNOWN_BROWSER = "Unknown"
UNKNOWN_OS = "Unknown OS"


class UserAgentParser:
    """Shortens user agents to browser names and detects the operating system.

    The configured browser list is consulted before the built-in patterns, so
    deployments can add names without code changes.
    """

    def __init__(self, browser_list: BrowserList | None = None):
        self.browser_entries = browser_list.entries if browser_list is not None else {}

    def browser_name(self, user_agent: str | None) -> str:
        """Get a short browser name for a user agent string."""
        if not user_agent:
            return UNKNOWN_BROWSER

        for needle, name in self.browser_entries.items():
            if needle in user_agent:
                return name

        for pattern, name in _BROWSER_PATTERNS:
            if pattern.search(user_agent):
                return name

        # Bots and tools often send a single short token (curl/8.0)
        if " " in user_agent or len(user_agent) >= 39:
            return UNKNOWN_BROWSER
        return user_agent

    def os_name(self, user_agent: str | None) -> str:
        """Detect the operating system of a user agent string."""
        if not user_agent:
            return UNKNOWN_OS
        for pattern, name in _OS_PATTERNS:
            if pattern.search(user_agent):
                return name
        return UNKNOWN_OS


def truncate_user_agent(user_agent: str, max_length: int) -> str:
    """Cut overly long user agents so they fit the browser column."""
    if len(user_agent) >= max_length:
        return user_agent[: max_length - 3] + "..."
    return user_agent
