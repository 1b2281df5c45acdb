# -*- coding: utf-8 -*-
# label_sheets/exceptions.py
class LabelSheetsException(Exception):
    """Базовое исключение приложения"""
    pass

class ConfigurationError(LabelSheetsException):
    """Недопустимые настройки печати, раскладка не строится"""
    pass

class SettingsPersistenceError(LabelSheetsException):
    """Ошибка чтения или записи файла настроек"""
    pass

class RenderError(LabelSheetsException):
    """Ошибка генерации PDF или предпросмотра"""
    pass

class RangeWarning(UserWarning):
    """Значение вне допустимого диапазона было ограничено"""
    pass
