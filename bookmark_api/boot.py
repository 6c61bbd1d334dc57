"""
Environment bootloader.

Used by:
1. Application startup (main.py) -> mode="critical"
2. CI / shell -> ``python -m bookmark_api.boot --mode dry-run``
"""

import asyncio
import sys
import time
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.ext.asyncio import create_async_engine

from bookmark_api.config import settings
from bookmark_api.database import ping
from bookmark_api.logger import get_logger

logger = get_logger(__name__)

DEV_SECRET_KEY = "dev_secret_key_change_in_prod"


class BootMode(str, Enum):
    CRITICAL = "critical"  # Config + DB (fast fail for startup)
    DRY_RUN = "dry-run"  # Static config check only


@dataclass
class ServiceStatus:
    service: str
    status: str  # 'ok', 'error', 'skipped'
    message: str
    duration_ms: float = 0.0


class Bootloader:
    """Handles environment validation and service connectivity checks."""

    @staticmethod
    async def validate(mode: BootMode = BootMode.CRITICAL) -> bool:
        """Run validation checks. Returns True if passed, False if failed.

        If mode is CRITICAL, this calls sys.exit(1) on failure.
        """
        logger.info("Bootloader starting validation", mode=mode.value)

        if not Bootloader._check_static_config():
            if mode == BootMode.CRITICAL:
                logger.critical("Static configuration check failed. Refusing to start.")
                sys.exit(1)
            return False

        if mode == BootMode.DRY_RUN:
            return True

        res = await Bootloader._check_database()
        if res.status == "error":
            logger.error(
                "Service check failed",
                service=res.service,
                error=res.message,
                duration_ms=res.duration_ms,
            )
            logger.critical("Critical service checks failed. Application cannot start.")
            sys.exit(1)

        logger.info("Service check passed", service=res.service, duration_ms=res.duration_ms)
        logger.info("Bootloader validation successful")
        return True

    @staticmethod
    def _check_static_config() -> bool:
        """Verify the settings the auth layer cannot run without."""
        if not settings.database_url:
            logger.error("Configuration load failed", error="DATABASE_URL is empty")
            return False
        if not settings.secret_key:
            logger.error("Configuration load failed", error="SECRET_KEY is empty")
            return False
        if settings.access_token_expire_minutes <= 0:
            logger.error(
                "Configuration load failed",
                error="ACCESS_TOKEN_EXPIRE_MINUTES must be positive",
            )
            return False
        if settings.secret_key == DEV_SECRET_KEY and settings.is_production:
            logger.error("Configuration load failed", error="SECRET_KEY uses the development default")
            return False
        return True

    @staticmethod
    async def _check_database() -> ServiceStatus:
        """Verify database connectivity (SELECT 1)."""
        start = time.perf_counter()
        engine = None
        try:
            engine = create_async_engine(settings.database_url, echo=False)
            async with engine.connect() as conn:
                await ping(conn)

            duration_ms = (time.perf_counter() - start) * 1000
            return ServiceStatus("database", "ok", "Connection successful", duration_ms)

        except Exception as e:
            duration_ms = (time.perf_counter() - start) * 1000
            return ServiceStatus("database", "error", str(e), duration_ms)
        finally:
            if engine:
                await engine.dispose()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser()
    parser.add_argument("--mode", type=str, default="critical", choices=["critical", "dry-run"])
    args = parser.parse_args()

    try:
        success = asyncio.run(Bootloader.validate(BootMode(args.mode)))
    except KeyboardInterrupt:
        print("\nAborted.")
        sys.exit(130)

    if success:
        print("Validation check passed.")
        sys.exit(0)
    else:
        print("Validation check failed.")
        sys.exit(1)
