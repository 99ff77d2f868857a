#  Copyright (c) LTS Design 2026-10-17.

from unittest.mock import MagicMock

import pytest
import requests

from respoolertool.flasher import FirmwareDistribution, FirmwareDownloadFailed
from respoolertool.models import FIRMWARE_VERSION_URL, BoardVariant


def make_http(ok=True, status_code=200, content=b"", text="", error=None):
    http = MagicMock(spec=requests.Session)
    if error:
        http.get.side_effect = error
        return http
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.content = content
    response.text = text
    http.get.return_value.__enter__.return_value = response
    return http


def test_fetch_image():
    http = make_http(content=b"\xe9\x03\x02\x20")
    data = FirmwareDistribution(http).fetch_image(BoardVariant.CONTROL_BOARD_V4)
    assert data == b"\xe9\x03\x02\x20"
    url = http.get.call_args[0][0]
    assert url.endswith("/ControlBoard_V4_latest.bin")


def test_fetch_image_http_error():
    http = make_http(ok=False, status_code=404)
    with pytest.raises(FirmwareDownloadFailed) as exc_info:
        FirmwareDistribution(http).fetch_image(BoardVariant.DEVKIT)
    assert exc_info.value.status == 404
    assert str(exc_info.value) == "Failed to download firmware: 404"


def test_fetch_image_network_error():
    http = make_http(error=requests.ConnectionError("Name or service not known"))
    with pytest.raises(FirmwareDownloadFailed) as exc_info:
        FirmwareDistribution(http).fetch_image(BoardVariant.DEVKIT)
    assert exc_info.value.status is None
    assert "network error" in str(exc_info.value)


def test_latest_version():
    http = make_http(text="2.4.1 2026-09-30\n")
    assert FirmwareDistribution(http).fetch_latest_version() == "2.4.1"
    assert http.get.call_args[0][0] == FIRMWARE_VERSION_URL


@pytest.mark.parametrize(
    "http",
    [
        make_http(ok=False, status_code=500),
        make_http(text="   \n"),
        make_http(error=requests.Timeout("read timed out")),
    ],
)
def test_latest_version_fallback(http):
    assert FirmwareDistribution(http).fetch_latest_version() == "0.0.0"
