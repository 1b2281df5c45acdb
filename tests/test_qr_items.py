# -*- coding: utf-8 -*-
# tests/test_qr_items.py
import os
import shutil
import sys
import tempfile
import unittest
from PIL import Image

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from label_sheets.exceptions import ConfigurationError
from label_sheets.models import QRCodeData, QRCodePrintSettings
from label_sheets.qr_items import make_qr_image, make_qr_items


class TestQRItems(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def create_icon(self):
        icon_path = os.path.join(self.temp_dir, 'icon.png')
        Image.new('RGBA', (64, 64), color=(255, 0, 0, 255)).save(icon_path)
        return icon_path

    def test_qr_image_is_square(self):
        """Изображение кода квадратное, пропорции известны заранее"""
        img = make_qr_image('web+spoolman:s-42')
        self.assertEqual(img.mode, 'RGB')
        self.assertEqual(img.width, img.height)
        self.assertGreater(img.width, 0)

    def test_error_levels(self):
        low = make_qr_image('x' * 40, 'L')
        high = make_qr_image('x' * 40, 'H')
        self.assertGreaterEqual(high.width, low.width)

    def test_unknown_error_level(self):
        with self.assertRaises(ConfigurationError):
            make_qr_image('value', 'Z')

    def test_caption_defaults_to_value(self):
        records = [QRCodeData('a'), QRCodeData('b', label='Spool B')]
        items = make_qr_items(records, QRCodePrintSettings(show_icon=False))
        self.assertEqual([item.caption for item in items], ['a', 'Spool B'])
        self.assertEqual([item.key for item in items], ['a', 'b'])

    def test_hide_content(self):
        items = make_qr_items([QRCodeData('a', label='A')], QRCodePrintSettings(show_content=False))
        self.assertIsNone(items[0].caption)

    def test_icon_overlay(self):
        settings = QRCodePrintSettings(show_icon=True, icon_path=self.create_icon())
        with_icon = make_qr_items([QRCodeData('value', error_level='H')], settings)[0].visual
        plain = make_qr_image('value', 'H')

        self.assertEqual(with_icon.size, plain.size)
        center = (with_icon.width // 2, with_icon.height // 2)
        self.assertEqual(with_icon.getpixel(center), (255, 0, 0))

    def test_icon_disabled(self):
        settings = QRCodePrintSettings(show_icon=False, icon_path=self.create_icon())
        visual = make_qr_items([QRCodeData('value', error_level='H')], settings)[0].visual
        center = (visual.width // 2, visual.height // 2)
        self.assertNotEqual(visual.getpixel(center), (255, 0, 0))

    def test_order_preserved(self):
        records = [QRCodeData(str(i)) for i in range(5)]
        items = make_qr_items(records, QRCodePrintSettings())
        self.assertEqual([item.key for item in items], ['0', '1', '2', '3', '4'])


if __name__ == '__main__':
    unittest.main()
