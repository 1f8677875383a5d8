"""
Runtime configuration
=====================
Process-wide knobs read once from the environment (and a .env file, if
present). Holds no key material; keys travel with each call in
CascadeSettings.

    CASCADE_LOG_LEVEL      logging level name          (WARNING)
    CASCADE_JSON_INDENT    indent for decrypted JSON   (2)
    CASCADE_TEXT_ENCODING  codec for text <-> bytes    (utf-8)
"""
from __future__ import annotations

import codecs
import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class CascadeConfig(BaseModel):
    # Logging
    log_level: str = Field(default="WARNING")

    # Text handling
    json_indent: int = Field(default=2, ge=0, le=8)
    text_encoding: str = Field(default="utf-8")

    @field_validator("log_level")
    @classmethod
    def _level(cls, v: str) -> str:
        v = v.strip().upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Unknown log level: {v}")
        return v

    @field_validator("text_encoding")
    @classmethod
    def _encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as exc:
            raise ValueError(f"Unknown text encoding: {v}") from exc
        return v


@lru_cache(maxsize=1)
def load_config() -> CascadeConfig:
    # Load .env if present
    load_dotenv()

    return CascadeConfig(
        log_level=os.getenv("CASCADE_LOG_LEVEL", "WARNING"),
        json_indent=int(os.getenv("CASCADE_JSON_INDENT", "2")),
        text_encoding=os.getenv("CASCADE_TEXT_ENCODING", "utf-8"),
    )


def configure_logging(config: CascadeConfig | None = None) -> None:
    cfg = config or load_config()
    logging.basicConfig(
        level=getattr(logging, cfg.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
