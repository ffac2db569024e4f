# odyssey/core/config.py

import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from rich.logging import RichHandler

DEFAULT_MODEL = "gemini-2.5-flash"
TEMPERATURE = 0.2  # fixed low: costs and calories must add up


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    model: str = DEFAULT_MODEL
    log_level: str = "INFO"


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment (call load_dotenv() first).
    GEMINI_API_KEY wins over the generic API_KEY. The temperature is not
    configurable.
    """
    env = os.environ if env is None else env
    api_key = (env.get("GEMINI_API_KEY") or env.get("API_KEY") or "").strip()

    return Settings(
        api_key=api_key,
        model=env.get("GEMINI_MODEL") or DEFAULT_MODEL,
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Route the odyssey.* loggers through rich; safe to call more than once."""
    logger = logging.getLogger("odyssey")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)
