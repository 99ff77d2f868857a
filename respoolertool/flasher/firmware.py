#  Copyright (c) LTS Design 2026-10-17.

from logging import debug

import requests

from respoolertool.models import FIRMWARE_VERSION_URL, BoardVariant
from respoolertool.util.logging import graph
from respoolertool.util.misc import sizeof

from .errors import FirmwareDownloadFailed

DEFAULT_VERSION = "0.0.0"
HTTP_TIMEOUT = 30.0


class FirmwareDistribution:
    def __init__(
        self,
        http: requests.Session = None,
        timeout: float = HTTP_TIMEOUT,
    ) -> None:
        self.http = http or requests.Session()
        self.timeout = timeout

    def fetch_image(self, variant: BoardVariant) -> bytes:
        url = variant.profile.firmware_url
        graph(0, f"Downloading firmware from '{url}'")
        try:
            with self.http.get(url, timeout=self.timeout) as r:
                if not r.ok:
                    raise FirmwareDownloadFailed(r.status_code, url)
                data = r.content
        except requests.RequestException as e:
            raise FirmwareDownloadFailed(None, url, str(e)) from e
        graph(1, f"Got {sizeof(len(data))} image")
        return data

    def fetch_latest_version(self) -> str:
        """
        Read the version of the latest published firmware.

        Never fails; "0.0.0" stands in for an unknown version.
        """
        try:
            with self.http.get(FIRMWARE_VERSION_URL, timeout=self.timeout) as r:
                if not r.ok:
                    debug(f"Version check returned {r.status_code}")
                    return DEFAULT_VERSION
                tokens = r.text.split()
        except requests.RequestException as e:
            debug(f"Version check failed: {e}")
            return DEFAULT_VERSION
        return tokens[0] if tokens else DEFAULT_VERSION
