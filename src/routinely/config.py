"""User-configurable values loaded from environment variables."""

import os
import sys
from pathlib import Path
from typing import NoReturn
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()


def _fail(*lines: str) -> NoReturn:
    for line in lines:
        print(line, file=sys.stderr)
    raise SystemExit(1)


if not os.environ.get("ROUTINELY_USER_ID"):
    _fail(
        "Missing required env var: ROUTINELY_USER_ID",
        "Set it in .env or your environment.",
    )

USER_ID: str = os.environ["ROUTINELY_USER_ID"]
# Shown as the heading of the routine list
USER_NAME: str = os.environ.get("ROUTINELY_USER_NAME") or USER_ID
LOG_LEVEL: str = os.environ.get("ROUTINELY_LOG_LEVEL", "WARNING").upper()


def _system_tz_name() -> str:
    """IANA name of the machine's zone, or UTC when it can't be determined."""
    etc_tz = Path("/etc/timezone")
    if etc_tz.exists() and etc_tz.read_text().strip():
        return etc_tz.read_text().strip()

    localtime = Path("/etc/localtime")
    if localtime.is_symlink():
        _, found, name = str(localtime.resolve()).partition("/zoneinfo/")
        if found and name:
            return name

    return "UTC"


def _load_tz() -> ZoneInfo:
    """Zone whose calendar date counts as "today" for every routine."""
    name = os.environ.get("ROUTINELY_TIMEZONE") or _system_tz_name()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        _fail(
            f"Unknown timezone: {name!r}",
            "Set ROUTINELY_TIMEZONE to an IANA name such as 'Asia/Seoul'.",
        )


TZ: ZoneInfo = _load_tz()
