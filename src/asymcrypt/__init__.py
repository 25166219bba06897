"""
Пакет asymcrypt
===============

Асимметричное шифрование коротких текстов для веб-клиентов и сервисов.

Этот пакет предоставляет:
    - Генерацию ключевой пары RSA-OAEP (2048 бит, SHA-256)
    - Экспорт/импорт ключей в Base64 (SPKI / PKCS#8 DER)
    - Шифрование и расшифрование UTF-8 текста до 190 байт
    - Async-обёртки для CPU-bound операций
    - Контекст приложения, создающий сервис шифрования один раз при старте

Пример базового использования:
    >>> from asymcrypt import AsymmetricCipher, get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> cipher = AsymmetricCipher.generate()
    >>> ct = cipher.encrypt("Привет, Мир!")
    >>> cipher.decrypt(ct)
    'Привет, Мир!'

Управление конфигурацией:
    >>> import os
    >>> os.environ['ASYMCRYPT_LOG_LEVEL'] = 'DEBUG'
    >>>
    >>> from asymcrypt import load_config
    >>> config = load_config()
    >>> config['verify_imported_pairs']
    False

Версия: 0.1.0
Лицензия: MIT
Python: 3.11+
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "asymcrypt Development Team"
__description__ = "RSA-OAEP/SHA-256 text encryption with Base64 key exchange"
__license__ = "MIT"
__python_requires__ = ">=3.11"

# Компоненты семантической версии
VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

# =============================================================================
# ПРОВЕРКА ВЕРСИИ PYTHON
# =============================================================================

if sys.version_info < (3, 11):
    raise RuntimeError(
        f"asymcrypt требует Python 3.11 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================

_LOG_LEVEL_ENV = "ASYMCRYPT_LOG_LEVEL"
_LOG_DIR_ENV = "ASYMCRYPT_LOG_DIR"


def _setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    Настраивает логгер пакета "asymcrypt" с:
    - Консольным обработчиком (stderr) для WARNING и выше
    - Ротирующим файловым обработчиком, если задана переменная
      окружения ASYMCRYPT_LOG_DIR
    - Форматом с временной меткой, уровнем, модулем и сообщением

    Уровень логирования задаётся переменной окружения
    ASYMCRYPT_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL.

    Функция идемпотентна - повторные вызовы не имеют эффекта.
    """
    log_level_str = os.environ.get(_LOG_LEVEL_ENV, "INFO").upper()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    root_logger = logging.getLogger("asymcrypt")
    if root_logger.handlers:
        return

    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt=("[%(asctime)s] %(levelname)-8s " "[%(name)s.%(funcName)s:%(lineno)d] %(message)s"),
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_dir_str = os.environ.get(_LOG_DIR_ENV)
    if log_dir_str:
        try:
            log_dir = Path(log_dir_str)
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_dir / "asymcrypt.log",
                maxBytes=10 * 1024 * 1024,  # 10 МБ
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(
                f"Не удалось инициализировать файловое логирование: {e}. "
                f"Используется только консоль."
            )

    root_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер для указанного модуля в пространстве имён "asymcrypt".

    Аргументы:
        module_name: Имя модуля, обычно `__name__`.

    Возвращает:
        Экземпляр logging.Logger с именем 'asymcrypt.<module_name>'.

    Пример:
        >>> logger = get_logger(__name__)
        >>> logger.info("Сервис шифрования создан")

    Примечание:
        Не передавайте в логгер открытый текст, ключи и шифротексты.
    """
    if not module_name.startswith("asymcrypt"):
        module_name = f"asymcrypt.{module_name}"
    return logging.getLogger(module_name)


# =============================================================================
# УПРАВЛЕНИЕ КОНФИГУРАЦИЕЙ
# =============================================================================

_DEFAULT_CONFIG: Dict[str, Any] = {
    "thread_pool_max_workers": 2,
    "verify_imported_pairs": False,
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Загрузить конфигурацию из asymcrypt.json или вернуть настройки по умолчанию.

    Ключи конфигурации:
        - thread_pool_max_workers: int - Размер пула потоков для async-операций
        - verify_imported_pairs: bool - Проверять соответствие половин
          ключевой пары при импорте

    Аргументы:
        config_path: Путь к файлу. Если None, ищет 'asymcrypt.json'
                    в текущем каталоге.

    Возвращает:
        Словарь со всеми ключами по умолчанию, пользовательские
        значения переопределяют значения по умолчанию.

    Пример:
        >>> config = load_config(Path("/etc/asymcrypt.json"))
        >>> config.get("thread_pool_max_workers", 2)
        2
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path("asymcrypt.json")

    config = _DEFAULT_CONFIG.copy()

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                user_config = json.load(f)

            if not isinstance(user_config, dict):
                raise ValueError(
                    f"Файл конфигурации должен содержать JSON-объект, "
                    f"получен {type(user_config).__name__}"
                )

            config.update(user_config)
            logger.info(f"Конфигурация загружена из {config_path}")

        except json.JSONDecodeError as e:
            logger.warning(
                f"Не удалось разобрать {config_path}: Недопустимый JSON "
                f"в строке {e.lineno}, столбце {e.colno}. "
                f"Используется конфигурация по умолчанию."
            )
        except OSError as e:
            logger.warning(
                f"Не удалось прочитать {config_path}: {e}. "
                f"Используется конфигурация по умолчанию."
            )
        except ValueError as e:
            logger.warning(
                f"Недопустимый формат конфигурации: {e}. "
                f"Используется конфигурация по умолчанию."
            )
    else:
        logger.debug(
            f"Файл конфигурации {config_path} не найден. "
            f"Используется конфигурация по умолчанию."
        )

    return config


def check_dependencies() -> Dict[str, bool]:
    """
    Проверить, установлены ли зависимости пакета.

    Проверяемые зависимости:
        Обязательные:
        - cryptography: RSA-OAEP, сериализация ключей DER

    Возвращает:
        Словарь, отображающий имена пакетов на статус доступности.
    """
    dependencies: Dict[str, bool] = {}

    try:
        import cryptography  # noqa: F401

        dependencies["cryptography"] = True
    except ImportError:
        dependencies["cryptography"] = False

    return dependencies


# =============================================================================
# ИМПОРТЫ КРИПТОГРАФИЧЕСКОГО СЛОЯ
# =============================================================================

# Импорты размещены после функций утилит, чтобы логирование
# было настроено первым.

_setup_logging()

from .security.crypto import (  # noqa: E402
    AsymmetricCipher,
    CryptoError,
    DecodingError,
    DecryptionError,
    EncryptionError,
    ExportedKeyPair,
    KeyExportError,
    KeyGenerationError,
    KeyImportError,
    KeyPair,
    PlaintextTooLargeError,
)
from .app_context import (  # noqa: E402
    AppContext,
    ServicesNotReadyError,
    get_app_context,
    init_app_context_async,
    require_app_context,
)

# =============================================================================
# ОПРЕДЕЛЕНИЕ ПУБЛИЧНОГО API
# =============================================================================

__all__ = [
    # Метаданные версии
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Утилиты
    "get_logger",
    "load_config",
    "check_dependencies",
    # Шифрование
    "AsymmetricCipher",
    "KeyPair",
    "ExportedKeyPair",
    # Исключения
    "CryptoError",
    "KeyGenerationError",
    "KeyExportError",
    "KeyImportError",
    "EncryptionError",
    "PlaintextTooLargeError",
    "DecodingError",
    "DecryptionError",
    # Контекст приложения
    "AppContext",
    "ServicesNotReadyError",
    "get_app_context",
    "init_app_context_async",
    "require_app_context",
]

# =============================================================================
# ИНИЦИАЛИЗАЦИЯ ПАКЕТА
# =============================================================================

_logger = get_logger(__name__)
_logger.debug(f"asymcrypt v{__version__} инициализируется...")

_deps = check_dependencies()
_missing = [name for name, available in _deps.items() if not available]
if _missing:
    _logger.warning(f"Отсутствуют зависимости: {', '.join(_missing)}")
