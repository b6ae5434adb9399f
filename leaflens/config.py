from dataclasses import dataclass
from typing import Optional
import math
import os
from dotenv import load_dotenv

from leaflens.constants import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RATE_LIMIT_BASE_DELAY_MS,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TEMPERATURE,
    DEFAULT_TRANSPORT_BASE_DELAY_MS,
    GEMINI_API_URL,
    MAX_TEMPERATURE,
    MIN_TEMPERATURE,
)
from leaflens.models import RetryPolicy


def _parse_number(name: str, raw: str, kind: type) -> float | int:
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Config:
    gemini_api_key: Optional[str]
    gemini_api_url: str
    log_level: str
    max_attempts: int
    transport_base_delay_ms: int
    rate_limit_base_delay_ms: int
    request_timeout: float
    temperature: float

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        api_key = os.getenv("GEMINI_API_KEY") or None
        api_url = os.getenv("GEMINI_API_URL") or GEMINI_API_URL
        log_level = os.getenv("LOG_LEVEL", "INFO")
        max_attempts = os.getenv("MAX_ATTEMPTS", str(DEFAULT_MAX_ATTEMPTS))
        transport_delay = os.getenv(
            "TRANSPORT_BASE_DELAY_MS", str(DEFAULT_TRANSPORT_BASE_DELAY_MS)
        )
        rate_limit_delay = os.getenv(
            "RATE_LIMIT_BASE_DELAY_MS", str(DEFAULT_RATE_LIMIT_BASE_DELAY_MS)
        )
        timeout = os.getenv("REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))
        temperature = os.getenv("TEMPERATURE", str(DEFAULT_TEMPERATURE))

        return cls._validate(
            gemini_api_key=api_key,
            gemini_api_url=api_url,
            log_level=log_level,
            max_attempts=_parse_number("MAX_ATTEMPTS", max_attempts, int),
            transport_base_delay_ms=_parse_number(
                "TRANSPORT_BASE_DELAY_MS", transport_delay, int
            ),
            rate_limit_base_delay_ms=_parse_number(
                "RATE_LIMIT_BASE_DELAY_MS", rate_limit_delay, int
            ),
            request_timeout=_parse_number("REQUEST_TIMEOUT", timeout, float),
            temperature=_parse_number("TEMPERATURE", temperature, float),
        )

    @staticmethod
    def _validate(
        gemini_api_key: Optional[str],
        gemini_api_url: str,
        log_level: str,
        max_attempts: int,
        transport_base_delay_ms: int,
        rate_limit_base_delay_ms: int,
        request_timeout: float,
        temperature: float,
    ) -> "Config":
        match gemini_api_url:
            case str() as url if url.startswith(("http://", "https://")):
                pass
            case _:
                raise ValueError("GEMINI_API_URL must be an http(s) URL")

        match max_attempts:
            case n if n < 1:
                raise ValueError("MAX_ATTEMPTS must be at least 1")
            case _:
                pass

        match (transport_base_delay_ms, rate_limit_base_delay_ms):
            case (t, _) if t < 0:
                raise ValueError("TRANSPORT_BASE_DELAY_MS must not be negative")
            case (_, r) if r < 0:
                raise ValueError("RATE_LIMIT_BASE_DELAY_MS must not be negative")
            case _:
                pass

        match request_timeout:
            case t if not math.isfinite(t) or t <= 0:
                raise ValueError("REQUEST_TIMEOUT must be a positive finite number")
            case _:
                pass

        match temperature:
            case t if MIN_TEMPERATURE <= t <= MAX_TEMPERATURE:
                pass
            case _:
                raise ValueError(
                    f"TEMPERATURE must be between {MIN_TEMPERATURE} and {MAX_TEMPERATURE}"
                )

        return Config(
            gemini_api_key=gemini_api_key,
            gemini_api_url=gemini_api_url,
            log_level=log_level,
            max_attempts=max_attempts,
            transport_base_delay_ms=transport_base_delay_ms,
            rate_limit_base_delay_ms=rate_limit_base_delay_ms,
            request_timeout=request_timeout,
            temperature=temperature,
        )

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.max_attempts,
            rate_limit_base_delay=self.rate_limit_base_delay_ms / 1000,
            transport_base_delay=self.transport_base_delay_ms / 1000,
        )
