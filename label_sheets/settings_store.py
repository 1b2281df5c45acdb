"""
Хранение настроек печати в JSON
"""
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Union

from .exceptions import ConfigurationError, SettingsPersistenceError
from .layout_engine import normalize_settings
from .models import PrintSettings, QRCodePrintSettings

logger = logging.getLogger(__name__)

AnySettings = Union[PrintSettings, QRCodePrintSettings]


def _persisted_value(value: Any) -> Any:
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, '__dataclass_fields__'):
        return {name: getattr(value, name) for name in value.__dataclass_fields__}
    return value


def validate_settings(settings: AnySettings) -> AnySettings:
    """Проверить, что по настройкам строится раскладка; иначе ConfigurationError"""
    print_settings = settings.print_settings if isinstance(settings, QRCodePrintSettings) else settings
    normalize_settings(print_settings)
    return settings


def update_settings(settings: AnySettings, **changes) -> AnySettings:
    """
    Вернуть новую копию настроек с изменёнными полями; исходный объект не меняется.

    Изменения проходят через тот же разбор, что и файл настроек, поэтому
    строковые значения перечислений приводятся к Enum, а недопустимые
    значения отклоняются с ConfigurationError.
    """
    keys = {name: key for key, name in settings.PERSISTED_KEYS.items()}
    data = settings.to_dict()
    for name, value in changes.items():
        if name not in keys:
            raise ConfigurationError(f"Недопустимое поле настроек: {name}")
        data[keys[name]] = _persisted_value(value)
    return validate_settings(type(settings).from_dict(data))


class SettingsStore:
    def __init__(self, config_file: Union[str, Path], settings_class=QRCodePrintSettings):
        self.config_file = Path(config_file)
        self.settings_class = settings_class

    def load(self) -> AnySettings:
        if not self.config_file.exists():
            logger.info(f"Файл настроек не найден, используются значения по умолчанию: {self.config_file}")
            return self.settings_class()

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SettingsPersistenceError(f"Не удалось прочитать {self.config_file}: {e}")

        settings = self.settings_class.from_dict(config)
        logger.info(f"Конфигурация загружена: {self.config_file}")
        return settings

    def save(self, settings: AnySettings):
        # недопустимые настройки не попадают на диск
        payload = json.dumps(validate_settings(settings).to_dict(), indent=2, ensure_ascii=False)
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(self.config_file, 'w', encoding='utf-8') as f:
                f.write(payload)
        except OSError as e:
            raise SettingsPersistenceError(f"Не удалось сохранить {self.config_file}: {e}")

        logger.info(f"Конфигурация сохранена: {self.config_file}")

    def update(self, settings: AnySettings, **changes) -> AnySettings:
        """Применить изменение, сохранить и вернуть новое значение"""
        new_settings = update_settings(settings, **changes)
        self.save(new_settings)
        return new_settings
