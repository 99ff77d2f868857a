#  Copyright (c) LTS Design 2026-10-17.

import json
from json import JSONDecodeError
from os import makedirs
from os.path import dirname, isfile
from typing import Optional, Union


def readtext(file: str) -> Optional[str]:
    if not isfile(file):
        return None
    with open(file, "r", encoding="utf-8") as f:
        return f.read()


def writetext(file: str, data: Union[str, bytes]) -> None:
    makedirs(dirname(file) or ".", exist_ok=True)
    with open(file, "w", encoding="utf-8") as f:
        f.write(data if isinstance(data, str) else data.decode())


def readjson(file: str) -> Optional[dict]:
    text = readtext(file)
    if text is None:
        return None
    try:
        data = json.loads(text)
    except JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def writejson(file: str, data: Union[dict, list]) -> None:
    writetext(file, json.dumps(data, indent="\t"))
