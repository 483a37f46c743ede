"""
指令包裝器

取代逐一手寫的日誌樣板：記錄呼叫參數、成功或失敗，
並把 PixelsmithError 轉成帶有前綴訊息的 CommandError
"""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from pixelsmith.errors import CommandError, PixelsmithError


logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def logged_command(
    failure_prefix: str,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    建立指令裝飾器

    Args:
        failure_prefix: 失敗訊息前綴，例如 "Conversion failed"

    Returns:
        裝飾器；被包裝的指令失敗時拋出 CommandError("<prefix>: <error>")
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        name = func.__name__

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            logger.info("🔄 Running command '%s' with %s %s", name, args, kwargs)
            try:
                result = await func(*args, **kwargs)
            except PixelsmithError as exc:
                logger.error("❌ Command '%s' failed: %s", name, exc)
                raise CommandError(f"{failure_prefix}: {exc}") from exc
            logger.info("✅ Command '%s' succeeded", name)
            return result

        return wrapper

    return decorator
