"""
Tests for base URL resolution, the login gate and logo loading.
"""
import base64
import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import DEFAULT_API_BASE_URL, LOCAL_API_BASE_URL, resolve_api_base_url  # noqa: E402
from services.auth_service import check_credentials  # noqa: E402
from utils.logo import load_logo_data_url, read_logo, to_data_url  # noqa: E402


class TestResolveApiBaseUrl(unittest.TestCase):

    def test_local_hosts(self):
        for host in ["localhost", "localhost:8501", "127.0.0.1:8501", "LOCALHOST"]:
            self.assertEqual(resolve_api_base_url(host, "https://pi.example.com"), LOCAL_API_BASE_URL.rstrip("/"))

    def test_remote_configured(self):
        self.assertEqual(
            resolve_api_base_url("pi.streamlit.app", "https://pi.example.com///"),
            "https://pi.example.com",
        )

    def test_remote_fallback(self):
        self.assertEqual(resolve_api_base_url("pi.streamlit.app", ""), DEFAULT_API_BASE_URL)
        self.assertEqual(resolve_api_base_url(None, ""), DEFAULT_API_BASE_URL)

    def test_localhost_lookalike_is_remote(self):
        self.assertEqual(resolve_api_base_url("localhost.evil.com", ""), DEFAULT_API_BASE_URL)


class TestCredentials(unittest.TestCase):

    def test_match_with_whitespace(self):
        self.assertTrue(check_credentials(" admin ", "s3cret\n", "admin", "s3cret"))

    def test_mismatch(self):
        self.assertFalse(check_credentials("admin", "wrong", "admin", "s3cret"))
        self.assertFalse(check_credentials("", "", "admin", "s3cret"))
        self.assertFalse(check_credentials(None, None, "admin", "s3cret"))


class TestLogo(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_data_url(self):
        path = self.dir / "logo.png"
        path.write_bytes(b"\x89PNG fake")
        url = load_logo_data_url(path)
        self.assertTrue(url.startswith("data:image/png;base64,"))
        self.assertEqual(base64.b64decode(url.split(",", 1)[1]), b"\x89PNG fake")

    def test_jpeg_mime(self):
        path = self.dir / "logo.jpg"
        path.write_bytes(b"\xff\xd8 fake")
        self.assertTrue(load_logo_data_url(path).startswith("data:image/jpeg;base64,"))

    def test_preloaded_bytes_typed_from_path(self):
        url = load_logo_data_url(self.dir / "logo.jpeg", b"\xff\xd8 fake")
        self.assertTrue(url.startswith("data:image/jpeg;base64,"))
        self.assertEqual(base64.b64decode(url.split(",", 1)[1]), b"\xff\xd8 fake")

    def test_missing_logo_is_none(self):
        with self.assertLogs("utils.logo", level="ERROR"):
            self.assertIsNone(read_logo(self.dir / "missing.png"))
        self.assertIsNone(load_logo_data_url(self.dir / "missing.png"))

    def test_empty_logo_is_none(self):
        path = self.dir / "logo.png"
        path.write_bytes(b"")
        self.assertIsNone(read_logo(path))

    def test_to_data_url(self):
        self.assertEqual(to_data_url(b"abc", "image/gif"), "data:image/gif;base64,YWJj")


if __name__ == "__main__":
    unittest.main()
