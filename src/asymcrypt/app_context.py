"""
Контекст приложения: сервис шифрования создаётся один раз при старте и
раздаётся потребителям по ссылке. После создания контекст не меняется,
кроме реестра дополнительных сервисов.
"""

import threading
from typing import Any, Dict, Optional

from asymcrypt import get_logger, load_config
from asymcrypt.security.crypto.asymmetric import (
    AsymmetricCipher,
    ExportedKeyPair,
    configure_thread_pool,
)

_logger = get_logger(__name__)


class ServicesNotReadyError(RuntimeError):
    """Context requested before startup construction finished."""


class AppContext:
    """
    Dependency Injection context for asymcrypt.
    Держит единственный экземпляр AsymmetricCipher и расширяемый реестр сервисов.
    """

    def __init__(
        self,
        encryption_service: AsymmetricCipher,
        config: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.encryption_service: AsymmetricCipher = encryption_service
        self.config: Dict[str, Any] = config if config is not None else load_config()

        # Extendable services dictionary for any future needs
        self.services: Dict[str, Any] = {"encryption_service": encryption_service}

    @classmethod
    def create(cls, config: Optional[Dict[str, Any]] = None) -> "AppContext":
        """Build a context around a freshly generated key pair (blocking)."""
        cfg = config if config is not None else load_config()
        ctx = cls(AsymmetricCipher.generate(), cfg)
        _logger.info("Контекст приложения создан")
        return ctx

    @classmethod
    async def create_async(cls, config: Optional[Dict[str, Any]] = None) -> "AppContext":
        """Build a context without blocking the running event loop."""
        cfg = config if config is not None else load_config()
        ctx = cls(await AsymmetricCipher.generate_async(), cfg)
        _logger.info("Контекст приложения создан (async)")
        return ctx

    @classmethod
    def from_exported(
        cls, exported: ExportedKeyPair, config: Optional[Dict[str, Any]] = None
    ) -> "AppContext":
        """Build a context from key material the caller kept in its own storage."""
        cfg = config if config is not None else load_config()
        pair = AsymmetricCipher.import_key_pair(
            exported.public_key,
            exported.private_key,
            verify=bool(cfg.get("verify_imported_pairs", False)),
        )
        return cls(AsymmetricCipher(pair), cfg)

    def register_service(self, name: str, service: Any) -> None:
        """Register a service by name (extendable)."""
        self.services[name] = service

    def get_service(self, name: str) -> Any:
        """Retrieve a registered service by name."""
        return self.services[name]


_ctx: Optional[AppContext] = None
_ctx_lock = threading.Lock()


def _size_thread_pool(cfg: Dict[str, Any]) -> None:
    # Only the process-wide context owns the shared pool size.
    configure_thread_pool(int(cfg.get("thread_pool_max_workers", 2)))


def get_app_context(config: Optional[Dict[str, Any]] = None) -> AppContext:
    """
    Returns global app context (singleton!), building it on first use.
    """
    global _ctx
    if _ctx is None:
        with _ctx_lock:
            if _ctx is None:
                ctx = AppContext.create(config)
                _size_thread_pool(ctx.config)
                _ctx = ctx
    return _ctx


async def init_app_context_async(config: Optional[Dict[str, Any]] = None) -> AppContext:
    """Async startup hook; concurrent callers may race, the first finished context wins."""
    global _ctx
    if _ctx is not None:
        return _ctx
    ctx = await AppContext.create_async(config)
    with _ctx_lock:
        if _ctx is None:
            _size_thread_pool(ctx.config)
            _ctx = ctx
    return _ctx


def peek_app_context() -> Optional[AppContext]:
    return _ctx


def require_app_context() -> AppContext:
    """Return the context or fail while startup has not finished."""
    if _ctx is None:
        raise ServicesNotReadyError(
            "App context is not initialized; call get_app_context() or init_app_context_async() at startup"
        )
    return _ctx


def reset_app_context() -> None:
    """Drop the global context (for tests)."""
    global _ctx
    with _ctx_lock:
        _ctx = None
