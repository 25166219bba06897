"""
Модульные тесты для asymcrypt/__init__.py
Тестирует метаданные, логирование, конфигурацию и публичный API.
"""

import json
import logging
import logging.handlers
import re
from importlib import reload
from pathlib import Path
from unittest import mock

import pytest

import asymcrypt


class TestVersionMetadata:
    """Тестирование метаданных версии и констант."""

    def test_version_format(self) -> None:
        """Проверить, что __version__ следует семантическому версионированию."""
        assert re.match(r"^\d+\.\d+\.\d+$", asymcrypt.__version__)

    def test_version_components(self) -> None:
        """Проверить, что компоненты версии соответствуют __version__."""
        expected = (
            f"{asymcrypt.VERSION_MAJOR}."
            f"{asymcrypt.VERSION_MINOR}."
            f"{asymcrypt.VERSION_PATCH}"
        )
        assert asymcrypt.__version__ == expected

    def test_metadata_attributes(self) -> None:
        """Проверить, что атрибуты метаданных являются непустыми строками."""
        for attr in ("__author__", "__description__", "__license__", "__python_requires__"):
            value = getattr(asymcrypt, attr)
            assert isinstance(value, str) and value, attr


class TestPublicAPI:
    """Тестирование экспортов публичного API."""

    def test_all_exports_exist(self) -> None:
        """Проверить, что все имена в __all__ существуют в модуле."""
        for name in asymcrypt.__all__:
            assert hasattr(asymcrypt, name), f"Имя '{name}' из __all__ не существует в модуле"

    def test_no_duplicate_exports(self) -> None:
        """Проверить, что __all__ не содержит дубликатов."""
        assert len(asymcrypt.__all__) == len(set(asymcrypt.__all__))

    def test_cipher_exported(self) -> None:
        """Проверить, что сервис шифрования доступен с верхнего уровня."""
        cipher = asymcrypt.AsymmetricCipher.generate()
        assert cipher.decrypt(cipher.encrypt("Привет")) == "Привет"


class TestLogging:
    """Тестирование конфигурации логирования."""

    def test_get_logger_name_format(self) -> None:
        """Проверить, что имена логгеров попадают в пространство asymcrypt."""
        assert asymcrypt.get_logger("test_module").name == "asymcrypt.test_module"
        assert asymcrypt.get_logger("asymcrypt.app_context").name == "asymcrypt.app_context"

    def test_logger_is_configured(self) -> None:
        """Проверить, что логгер пакета имеет обработчики и не распространяет записи."""
        root_logger = logging.getLogger("asymcrypt")
        assert len(root_logger.handlers) >= 1
        assert root_logger.propagate is False

    def test_setup_logging_idempotent(self) -> None:
        """Проверить, что повторная настройка не дублирует обработчики."""
        root_logger = logging.getLogger("asymcrypt")
        before = len(root_logger.handlers)
        asymcrypt._setup_logging()
        assert len(root_logger.handlers) == before

    def test_log_level_and_file_from_environment(self, tmp_path: Path) -> None:
        """Проверить уровень и файловый обработчик из переменных окружения."""
        root_logger = logging.getLogger("asymcrypt")
        saved = root_logger.handlers[:]
        saved_level = root_logger.level
        env = {"ASYMCRYPT_LOG_LEVEL": "DEBUG", "ASYMCRYPT_LOG_DIR": str(tmp_path / "logs")}
        try:
            with mock.patch.dict("os.environ", env):
                for handler in root_logger.handlers[:]:
                    root_logger.removeHandler(handler)
                asymcrypt._setup_logging()
                assert root_logger.level == logging.DEBUG
                assert any(
                    isinstance(h, logging.handlers.RotatingFileHandler)
                    for h in root_logger.handlers
                )
                assert (tmp_path / "logs").is_dir()
        finally:
            for handler in root_logger.handlers[:]:
                root_logger.removeHandler(handler)
                handler.close()
            for handler in saved:
                root_logger.addHandler(handler)
            root_logger.setLevel(saved_level)


class TestConfiguration:
    """Тестирование управления конфигурацией."""

    def test_load_config_defaults(self, tmp_path: Path) -> None:
        """Проверить ключи по умолчанию, когда файл не существует."""
        config = asymcrypt.load_config(tmp_path / "missing.json")
        assert config["thread_pool_max_workers"] == 2
        assert config["verify_imported_pairs"] is False

    def test_load_config_from_file(self, tmp_path: Path) -> None:
        """Проверить слияние пользовательских значений с настройками по умолчанию."""
        config_path = tmp_path / "asymcrypt.json"
        config_path.write_text(
            json.dumps({"verify_imported_pairs": True, "custom_key": "v"}), encoding="utf-8"
        )
        config = asymcrypt.load_config(config_path)
        assert config["verify_imported_pairs"] is True
        assert config["custom_key"] == "v"
        assert config["thread_pool_max_workers"] == 2

    def test_load_config_does_not_mutate_defaults(self, tmp_path: Path) -> None:
        """Проверить, что значения по умолчанию не изменяются."""
        config_path = tmp_path / "asymcrypt.json"
        config_path.write_text(json.dumps({"thread_pool_max_workers": 8}), encoding="utf-8")
        asymcrypt.load_config(config_path)
        assert asymcrypt._DEFAULT_CONFIG["thread_pool_max_workers"] == 2

    @pytest.mark.parametrize("content", ["{invalid json content", json.dumps(["not", "a", "dict"])])
    def test_load_config_bad_content_falls_back(self, tmp_path: Path, content: str) -> None:
        """Проверить, что некорректный файл даёт конфигурацию по умолчанию."""
        config_path = tmp_path / "bad.json"
        config_path.write_text(content, encoding="utf-8")
        config = asymcrypt.load_config(config_path)
        assert config == asymcrypt._DEFAULT_CONFIG


class TestDependencyCheck:
    """Тестирование проверки зависимостей."""

    def test_check_dependencies(self) -> None:
        """Проверить, что cryptography обнаружена."""
        deps = asymcrypt.check_dependencies()
        assert deps == {"cryptography": True}

    def test_package_reload(self) -> None:
        """Проверить, что повторный импорт пакета не вызывает ошибок."""
        reload(asymcrypt)
        assert hasattr(asymcrypt, "__version__")
