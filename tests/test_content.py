"""
Tests for device-specific content selection.
"""

import unittest
from unittest import mock
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent))

import device_fixtures  # noqa: F401  (puts src/ on sys.path)
from device_detect.content import ContentKind, select_content
from device_detect.types import DeviceState

URL = "https://example.com"


class TestSelectContent(unittest.TestCase):

    def test_loading_placeholder(self):
        """Test placeholder while loading."""
        choice = select_content(DeviceState(is_mobile=True, is_loading=True), URL)
        self.assertEqual(choice.kind, ContentKind.PLACEHOLDER)
        self.assertIsNone(choice.url)

    def test_mobile_link(self):
        """Test link for mobile."""
        choice = select_content(DeviceState(is_mobile=True, is_loading=False), URL)
        self.assertEqual(choice.kind, ContentKind.LINK)
        self.assertEqual(choice.url, URL)
        self.assertIn("mobile", choice.message)

    def test_tablet_link(self):
        """Test link for tablet."""
        choice = select_content(DeviceState(is_tablet=True, is_loading=False), URL)
        self.assertEqual(choice.kind, ContentKind.LINK)
        self.assertIn("tablet", choice.message)

    def test_desktop_qr_code(self):
        """Test QR code for desktop."""
        choice = select_content(DeviceState(is_loading=False), URL)
        self.assertEqual(choice.kind, ContentKind.QR_CODE)
        self.assertEqual(choice.url, URL)

    def test_undetermined_state_is_an_assertion_failure(self):
        """Test an undetermined state fails loudly."""
        state = mock.Mock(is_loading=False, is_mobile_or_tablet=False, is_desktop=False)
        with self.assertRaises(AssertionError):
            select_content(state, URL)


if __name__ == '__main__':
    unittest.main()
