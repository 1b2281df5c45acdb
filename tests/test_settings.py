# -*- coding: utf-8 -*-
# tests/test_settings.py
import json
import os
import shutil
import sys
import tempfile
import unittest
from dataclasses import replace

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from label_sheets.exceptions import ConfigurationError, SettingsPersistenceError
from label_sheets.models import (
    BorderShowMode, Margins, PaperSize, PrintSettings, QRCodePrintSettings, Spacing
)
from label_sheets.settings_store import SettingsStore, update_settings


class TestPrintSettings(unittest.TestCase):

    def test_defaults(self):
        settings = PrintSettings.from_dict(None)
        self.assertEqual(settings, PrintSettings())
        self.assertEqual(settings.paper_size, 'A4')
        self.assertEqual(settings.custom_paper_size, PaperSize(210, 297))
        self.assertEqual(settings.margin, Margins(10, 10, 10, 10))
        self.assertEqual(settings.printer_margin, Margins(5, 5, 5, 5))
        self.assertEqual(settings.spacing, Spacing(0, 0))
        self.assertEqual((settings.columns, settings.rows), (3, 8))
        self.assertEqual((settings.skip_items, settings.item_copies), (0, 1))
        self.assertEqual(settings.border_show_mode, BorderShowMode.GRID)

    def test_round_trip_custom_paper(self):
        settings = PrintSettings(
            paper_size='custom',
            custom_paper_size=PaperSize(100, 150.5),
            margin=Margins(1, 2, -3, 4.25),
            printer_margin=Margins(0, 1, 2, 3),
            spacing=Spacing(1.5, 2),
            columns=5,
            rows=11,
            skip_items=7,
            item_copies=2,
            border_show_mode=BorderShowMode.BORDER,
        )
        data = settings.to_dict()
        self.assertEqual(data['paperSize'], 'custom')
        self.assertEqual(data['customPaperSize'], {'width': 100, 'height': 150.5})
        self.assertEqual(data['borderShowMode'], 'border')

        restored = PrintSettings.from_dict(json.loads(json.dumps(data)))
        self.assertEqual(restored, settings)

    def test_partial_dict(self):
        settings = PrintSettings.from_dict({'margin': {'top': 3}, 'columns': 4})
        self.assertEqual(settings.margin, Margins(3, 10, 10, 10))
        self.assertEqual(settings.columns, 4)
        self.assertEqual(settings.rows, 8)

    def test_unknown_keys_ignored(self):
        settings = PrintSettings.from_dict({'futureOption': True, 'rows': 2})
        self.assertEqual(settings.rows, 2)

    def test_invalid_values(self):
        for data in [{'borderShowMode': 'dotted'}, {'columns': 'abc'}, {'rows': 2.5},
                     {'margin': {'left': None}}, {'skipItems': True},
                     {'margin': {'left': float('nan')}}, {'spacing': {'horizontal': float('inf')}},
                     {'paperSize': 'custom', 'customPaperSize': [100, 150]}, {'margin': 5},
                     {'printerMargin': 'wide'}]:
            with self.subTest(data=data):
                with self.assertRaises(ConfigurationError):
                    PrintSettings.from_dict(data)

    def test_not_a_dict(self):
        with self.assertRaises(ConfigurationError):
            PrintSettings.from_dict([1, 2])

    def test_non_finite_from_json(self):
        """json читает NaN и Infinity, такие значения отклоняются"""
        for text in ['{"margin": {"left": NaN}}', '{"customPaperSize": {"width": Infinity}}']:
            with self.subTest(text=text):
                with self.assertRaises(ConfigurationError):
                    PrintSettings.from_dict(json.loads(text))

    def test_qr_settings_malformed(self):
        for data in [[1], 'settings', {'printSettings': 'x'}, {'printSettings': [3, 8]}]:
            with self.subTest(data=data):
                with self.assertRaises(ConfigurationError):
                    QRCodePrintSettings.from_dict(data)

    def test_qr_settings_round_trip(self):
        settings = QRCodePrintSettings(
            print_settings=PrintSettings(columns=4),
            show_content=False,
            text_size=3.5,
            show_icon=False,
            icon_path='icon.png',
        )
        self.assertEqual(QRCodePrintSettings.from_dict(settings.to_dict()), settings)

    def test_qr_settings_invalid_text_size(self):
        with self.assertRaises(ConfigurationError):
            QRCodePrintSettings.from_dict({'textSize': 0})


class TestUpdateSettings(unittest.TestCase):

    def test_returns_new_value(self):
        original = PrintSettings()
        updated = update_settings(original, columns=5, spacing=Spacing(1, 1))
        self.assertEqual(updated.columns, 5)
        self.assertEqual(original.columns, 3)
        self.assertEqual(original.spacing, Spacing(0, 0))
        self.assertIsNot(updated, original)

    def test_unknown_field(self):
        with self.assertRaises(ConfigurationError):
            update_settings(PrintSettings(), colums=5)

    def test_invalid_change_rejected(self):
        for changes in [{'columns': 0}, {'rows': -1}, {'paper_size': 'B7'},
                        {'border_show_mode': 'dotted'}, {'margin': Margins(float('nan'), 0, 0, 0)}]:
            with self.subTest(changes=changes):
                with self.assertRaises(ConfigurationError):
                    update_settings(PrintSettings(), **changes)

    def test_border_mode_string_coerced(self):
        updated = update_settings(PrintSettings(), border_show_mode='none')
        self.assertIs(updated.border_show_mode, BorderShowMode.NONE)
        self.assertEqual(updated.to_dict()['borderShowMode'], 'none')

    def test_nested_print_settings(self):
        qr_settings = update_settings(QRCodePrintSettings(), print_settings=PrintSettings(rows=4),
                                      text_size=3)
        self.assertEqual(qr_settings.print_settings.rows, 4)
        self.assertEqual(qr_settings.text_size, 3)


class TestSettingsStore(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.config_file = os.path.join(self.temp_dir, 'nested', 'settings.json')

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_missing_file_gives_defaults(self):
        store = SettingsStore(self.config_file)
        self.assertEqual(store.load(), QRCodePrintSettings())

    def test_save_and_load(self):
        store = SettingsStore(self.config_file)
        settings = QRCodePrintSettings(
            print_settings=PrintSettings(paper_size='custom', custom_paper_size=PaperSize(80, 120)),
            text_size=4,
        )
        store.save(settings)
        self.assertTrue(os.path.exists(self.config_file))
        self.assertEqual(store.load(), settings)

    def test_print_settings_class(self):
        store = SettingsStore(self.config_file, settings_class=PrintSettings)
        settings = PrintSettings(rows=3)
        store.save(settings)
        self.assertEqual(store.load(), settings)

    def test_update_persists(self):
        store = SettingsStore(self.config_file)
        updated = store.update(QRCodePrintSettings(), show_content=False)
        self.assertFalse(updated.show_content)
        self.assertFalse(store.load().show_content)

    def test_invalid_update_not_saved(self):
        """Недопустимое изменение отклоняется до записи файла"""
        store = SettingsStore(self.config_file)
        with self.assertRaises(ConfigurationError):
            store.update(QRCodePrintSettings(), print_settings=replace(PrintSettings(), columns=0))
        self.assertFalse(os.path.exists(self.config_file))

    def test_invalid_save_keeps_previous_file(self):
        store = SettingsStore(self.config_file)
        store.save(QRCodePrintSettings(text_size=4))
        broken = QRCodePrintSettings(print_settings=PrintSettings(paper_size='B7'))
        with self.assertRaises(ConfigurationError):
            store.save(broken)
        self.assertEqual(store.load(), QRCodePrintSettings(text_size=4))

    def test_partial_file(self):
        os.makedirs(os.path.dirname(self.config_file))
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump({'printSettings': {'columns': 2}}, f)
        settings = SettingsStore(self.config_file).load()
        self.assertEqual(settings.print_settings.columns, 2)
        self.assertTrue(settings.show_content)

    def test_invalid_json(self):
        os.makedirs(os.path.dirname(self.config_file))
        with open(self.config_file, 'w', encoding='utf-8') as f:
            f.write('{not json')
        with self.assertRaises(SettingsPersistenceError):
            SettingsStore(self.config_file).load()


if __name__ == '__main__':
    unittest.main()
