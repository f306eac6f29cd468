import sys
import traceback
from typing import Any

from pydantic import SecretStr
from uvicorn.server import logger

from util.config import config

REDACTED = "***"
LEVELS = {"trace": 0, "debug": 1, "info": 2, "warn": 3, "warning": 3, "error": 4}
_registered_secrets: dict[str, SecretStr] = {}


def _should_log(level: str) -> bool:
    if config.log_level == "local":
        return True  # we always log in local context
    current_level = LEVELS.get(config.log_level, 2)  # default to info
    return LEVELS.get(level.lower(), 2) >= current_level


def register_secrets(secrets: list[SecretStr]):
    """Adds secrets of an injected configuration to the ones redacted from every log line."""
    for secret in secrets:
        secret_value = secret.get_secret_value()
        if secret_value:
            _registered_secrets[secret_value] = secret


def _redact(text: str) -> str:
    for secret in [*config.all_secrets(), *_registered_secrets.values()]:
        secret_value = secret.get_secret_value()
        if secret_value:
            text = text.replace(secret_value, REDACTED)
    return text


def _format_args(*args: Any) -> tuple[str, list[Exception]]:
    exceptions: list[Exception] = []
    parts: list[str] = []
    for arg in args:
        if isinstance(arg, Exception):
            exceptions.append(arg)
            parts.append(f"! {type(arg).__name__} (see below)")
        else:
            parts.append(str(arg))

    if not parts:
        return "", exceptions
    if len(parts) == 1:
        return _redact(parts[0]), exceptions
    if not exceptions:
        head_lines = "\n ├─ ".join(parts[:-1])
        return _redact(f"{head_lines}\n └─ {parts[-1]}"), exceptions
    return _redact("\n ├─ ".join(parts)), exceptions


def _exception_lines(exception: Exception) -> tuple[str, str | None]:
    summary = _redact(str(exception))
    if trace := exception.__traceback__:
        return summary, "".join(traceback.format_tb(trace)).strip()
    return summary, None


def _print_locally(level: str, message: str, exceptions: list[Exception]):
    if _should_log(level):
        print(f"[{level[0]}] {message}")
    for exception in exceptions:
        summary, trace = _exception_lines(exception)
        print(f" ‼  Message: {summary}", file = sys.stderr)
        if trace:
            print(trace, file = sys.stderr)


def _log_message(level: str, message: str, exceptions: list[Exception]) -> str:
    if not _should_log(level) and not exceptions:
        return message

    if config.log_level == "local":
        _print_locally(level, message, exceptions)
        return message

    try:
        if _should_log(level):
            match level:
                case "TRACE" | "DEBUG":
                    logger.debug(message)
                case "INFO":
                    logger.info(message)
                case "WARN":
                    logger.warning(message)
                case "ERROR":
                    logger.error(message)
        for exception in exceptions:
            summary, trace = _exception_lines(exception)
            logger.error(f"Message: {summary}")
            if trace:
                logger.error(f"Details:\n └─ {trace}")
    except Exception:
        # the uvicorn logger is not usable outside of a server process in some setups
        _print_locally(level, message, exceptions)
    return message


def t(*args: Any) -> str:
    message, exceptions = _format_args(*args)
    return _log_message("TRACE", message, exceptions)


def d(*args: Any) -> str:
    message, exceptions = _format_args(*args)
    return _log_message("DEBUG", message, exceptions)


def i(*args: Any) -> str:
    message, exceptions = _format_args(*args)
    return _log_message("INFO", message, exceptions)


def w(*args: Any) -> str:
    message, exceptions = _format_args(*args)
    return _log_message("WARN", message, exceptions)


def e(*args: Any) -> str:
    message, exceptions = _format_args(*args)
    return _log_message("ERROR", message, exceptions)
