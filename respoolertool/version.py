#  Copyright (c) LTS Design 2026-10-17.

import re
import sys
from os.path import dirname, isfile, join
from typing import Optional

from importlib_metadata import PackageNotFoundError, version


def get_version() -> Optional[str]:
    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        pyproject = join(sys._MEIPASS, "pyproject.toml")
    else:
        pyproject = join(dirname(__file__), "..", "pyproject.toml")

    if isfile(pyproject):
        with open(pyproject, "r", encoding="utf-8") as f:
            ver = re.search(r"^version\s?=\s?\"(.+?)\"", f.read(), re.MULTILINE)
            if ver:
                return ver.group(1)
    try:
        return version("respoolertool")
    except PackageNotFoundError:
        return None


def get_version_full() -> str:
    tool_version = get_version()
    if not tool_version:
        return "unknown"
    if "site-packages" not in __file__:
        return f"v{tool_version} (dev)"
    return f"v{tool_version}"
