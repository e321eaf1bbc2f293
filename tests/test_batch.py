"""
Tests for batch classification of recorded snapshots.
"""

import tempfile
import unittest
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent))

import pandas as pd

from device_fixtures import StubParser
from device_detect.batch import classify_records, load_records, summarize, width_bands
from device_detect.types import DeviceType, ParsedUserAgent

PARSED = {
    "desktop-ua": ParsedUserAgent(os_name='Windows', cpu_architecture='amd64'),
    "phone-ua": ParsedUserAgent(device_type=DeviceType.MOBILE, os_name='Android'),
    "android-ua": ParsedUserAgent(os_name='Android'),
}


class TestLoadRecords(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmpdir.name)

    def tearDown(self):
        self.tmpdir.cleanup()

    def write(self, text):
        path = self.dir / "records.csv"
        path.write_text(text)
        return path

    def test_fills_optional_columns(self):
        """Test optional columns are filled and bad widths coerced to zero."""
        path = self.write("user_agent,viewport_width\nphone-ua,320\n,abc\n")
        df = load_records(path)
        self.assertEqual(list(df['viewport_height']), [0, 0])
        self.assertEqual(list(df['touch']), [False, False])
        self.assertEqual(list(df['viewport_width']), [320, 0])
        self.assertEqual(list(df['user_agent']), ['phone-ua', ''])

    def test_touch_strings(self):
        """Test touch column string values."""
        path = self.write("user_agent,viewport_width,touch\na,1,true\nb,1,0\nc,1,yes\n")
        self.assertEqual(list(load_records(path)['touch']), [True, False, True])

    def test_missing_columns(self):
        """Test missing required columns are rejected."""
        path = self.write("ua,width\nx,1\n")
        with self.assertRaises(ValueError):
            load_records(path)

    def test_empty_file(self):
        """Test a header-only file is rejected."""
        path = self.write("user_agent,viewport_width\n")
        with self.assertRaises(ValueError):
            load_records(path)

    def test_missing_file(self):
        """Test a missing file raises FileNotFoundError."""
        with self.assertRaises(FileNotFoundError):
            load_records(self.dir / "missing.csv")


class TestClassifyRecords(unittest.TestCase):

    def setUp(self):
        self.df = pd.DataFrame({
            'user_agent': ["desktop-ua", "phone-ua", "android-ua", "android-ua", "mozilla/5.0 (kfxyz)"],
            'viewport_width': [320, 390, 800, 1300, 320],
            'viewport_height': [800, 844, 1280, 800, 600],
            'touch': [False, True, True, True, True],
        })
        self.parser = StubParser(by_user_agent=PARSED)

    def test_classification_columns(self):
        """Test classification columns for mixed records."""
        out = classify_records(self.df, parser=self.parser)
        self.assertEqual(len(out), 5)
        self.assertEqual(list(out['initial_category']), ['desktop', 'mobile', 'tablet', 'mobile', 'tablet'])
        self.assertEqual(list(out['width_band']), ['mobile', 'mobile', 'tablet', 'desktop', 'mobile'])
        self.assertEqual(list(out['is_definitely_desktop']), [True, False, False, False, False])
        self.assertEqual(out.loc[0, 'evidence'], 'windows_no_touch_ua')
        self.assertEqual(out.loc[4, 'evidence'], 'ereader_hardware')

    def test_input_not_modified(self):
        """Test the input frame is left untouched."""
        classify_records(self.df, parser=self.parser)
        self.assertNotIn('initial_category', self.df.columns)

    def test_optional_columns_default(self):
        """Test records without height and touch columns."""
        df = pd.DataFrame({'user_agent': ["phone-ua"], 'viewport_width': [320]})
        out = classify_records(df, parser=self.parser)
        self.assertEqual(out.loc[0, 'initial_category'], 'mobile')

    def test_empty_frame(self):
        """Test an empty frame is rejected."""
        with self.assertRaises(ValueError):
            classify_records(pd.DataFrame(columns=['user_agent', 'viewport_width']))

    def test_summarize(self):
        """Test category counts in fixed order."""
        counts = summarize(classify_records(self.df, parser=self.parser))
        self.assertEqual(list(counts.index), ['desktop', 'tablet', 'mobile'])
        self.assertEqual(list(counts), [1, 2, 2])


class TestWidthBands(unittest.TestCase):

    def test_bands(self):
        """Test width band boundaries."""
        bands = width_bands([0, 599, 600, 1199, 1200])
        self.assertEqual(list(bands), ['mobile', 'mobile', 'tablet', 'tablet', 'desktop'])


if __name__ == '__main__':
    unittest.main()
