"""
Unit tests for the artifact downloader. HTTP is mocked; no network access.
"""

from unittest.mock import MagicMock

import pytest
import requests

from twogc_installer.errors import DownloadError
from twogc_installer.lib.net import download


def _session(chunks=(b"abc", b"", b"def"), status_error=None, get_error=None):
    response = MagicMock()
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    response.iter_content.return_value = iter(chunks)
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    session = MagicMock()
    if get_error is not None:
        session.get.side_effect = get_error
    else:
        session.get.return_value = response
    return session


class TestDownload:
    def test_streams_chunks_to_destination(self, tmp_path):
        dest = tmp_path / "artifact.msi"
        session = _session()

        written = download("https://example.test/a.msi", str(dest), timeout=5, session=session)

        assert written == 6
        assert dest.read_bytes() == b"abcdef"
        session.get.assert_called_once_with(
            "https://example.test/a.msi", stream=True, timeout=5, allow_redirects=True
        )

    def test_http_error_raises_download_error(self, tmp_path):
        dest = tmp_path / "artifact.msi"
        session = _session(status_error=requests.HTTPError("404 Client Error"))

        with pytest.raises(DownloadError) as exc:
            download("https://example.test/missing", str(dest), session=session)

        assert exc.value.reason == "download error"
        assert not dest.exists()

    def test_connection_error_raises_download_error(self, tmp_path):
        dest = tmp_path / "artifact.msi"
        session = _session(get_error=requests.ConnectionError("refused"))

        with pytest.raises(DownloadError):
            download("https://example.test/a.msi", str(dest), session=session)

        assert not dest.exists()

    def test_partial_file_removed_when_stream_breaks(self, tmp_path):
        dest = tmp_path / "artifact.msi"

        def chunks():
            yield b"partial"
            raise requests.exceptions.ChunkedEncodingError("connection broken")

        session = _session(chunks=chunks())

        with pytest.raises(DownloadError):
            download("https://example.test/a.msi", str(dest), session=session)

        assert not dest.exists()

    def test_dry_run_skips_request(self, tmp_path):
        session = _session()

        assert download("https://example.test/a.msi", str(tmp_path / "x"), session=session, dry_run=True) == 0
        session.get.assert_not_called()
