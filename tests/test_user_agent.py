"""Tests for user agent parsing and client info helpers."""

import pytest

from siteadmin.core.config import BrowserList
from siteadmin.utils.client_info import referer_host
from siteadmin.utils.user_agent import UserAgentParser, truncate_user_agent

CHROME_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
FIREFOX_UA = "Mozilla/5.0 (X11; Ubuntu; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0"
EDGE_UA = CHROME_UA + " Edg/120.0.2210.91"
SAFARI_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1"
)


@pytest.fixture
def browser_list(tmp_path) -> BrowserList:
    path = tmp_path / "browser-list.yaml"
    path.write_text('"YaBrowser/": Yandex\n"curl/": curl\n')
    return BrowserList(str(path))


@pytest.mark.parametrize(
    "user_agent, expected",
    [
        (CHROME_UA, "Chrome"),
        (FIREFOX_UA, "Firefox"),
        (EDGE_UA, "Edge"),
        (SAFARI_UA, "Safari"),
        ("Mozilla/4.0 (compatible; MSIE 8.0; Windows NT 6.1)", "Internet Explorer"),
        ("Opera/9.80 (Windows NT 6.1) Presto/2.12.388 Version/12.16", "Opera"),
    ],
)
def test_browser_name(user_agent: str, expected: str):
    assert UserAgentParser().browser_name(user_agent) == expected


def test_browser_name_fallbacks():
    parser = UserAgentParser()

    assert parser.browser_name("Wget/1.21") == "Wget/1.21"
    assert parser.browser_name("Some Unknown Agent") == "Unknown"
    assert parser.browser_name("x" * 40) == "Unknown"
    assert parser.browser_name("") == "Unknown"
    assert parser.browser_name(None) == "Unknown"


def test_browser_list_is_checked_first(browser_list: BrowserList):
    parser = UserAgentParser(browser_list)

    assert len(browser_list) == 2
    assert parser.browser_name(CHROME_UA + " YaBrowser/23.11") == "Yandex"
    assert parser.browser_name("curl/8.4.0") == "curl"
    assert parser.browser_name(CHROME_UA) == "Chrome"


def test_missing_browser_list_file(tmp_path):
    browser_list = BrowserList(str(tmp_path / "missing.yaml"))

    assert len(browser_list) == 0
    assert UserAgentParser(browser_list).browser_name(CHROME_UA) == "Chrome"


@pytest.mark.parametrize(
    "user_agent, expected",
    [
        (CHROME_UA, "Windows 10"),
        (FIREFOX_UA, "Ubuntu"),
        (SAFARI_UA, "Mac IOS"),
        ("Mozilla/5.0 (Linux; Android 14; Pixel 8)", "Android"),
        ("Mozilla/5.0 (Macintosh; Intel Mac OS X 14_1)", "Mac OS X"),
        ("curl/8.4.0", "Unknown OS"),
        (None, "Unknown OS"),
    ],
)
def test_os_name(user_agent, expected: str):
    assert UserAgentParser().os_name(user_agent) == expected


def test_truncate_user_agent():
    assert truncate_user_agent("short", 200) == "short"

    truncated = truncate_user_agent("a" * 250, 200)
    assert len(truncated) == 200
    assert truncated.endswith("...")

    assert truncate_user_agent("a" * 200, 200) == "a" * 197 + "..."


@pytest.mark.parametrize(
    "referer, expected",
    [
        ("https://www.google.com/search?q=test", "www.google.com"),
        ("http://example.com:8080/page", "example.com"),
        ("", "Unknown"),
        (None, "Unknown"),
        ("not a url", "Unknown"),
    ],
)
def test_referer_host(referer, expected: str):
    assert referer_host(referer) == expected
