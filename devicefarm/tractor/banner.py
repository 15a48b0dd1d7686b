"""Startup banner."""

BANNER = r"""
 ____              _            _____                   _____               _
|  _ \  _____   __(_) ___ ___  |  ___|_ _ _ __ _ __ ___ |_   _| __ __ _  ___| |_ ___  _ __
| | | |/ _ \ \ / /| |/ __/ _ \ | |_ / _` | '__| '_ ` _ \  | || '__/ _` |/ __| __/ _ \| '__|
| |_| |  __/\ V / | | (_|  __/ |  _| (_| | |  | | | | | | | || | | (_| | (__| || (_) | |
|____/ \___| \_/  |_|\___\___| |_|  \__,_|_|  |_| |_| |_| |_||_|  \__,_|\___|\__\___/|_|

Run Appium tests on AWS Device Farm
-------------------------------------------------------------------------------------------
"""


def render_banner() -> str:
    """Return the banner as a single log message."""
    return "\r\n" + BANNER
