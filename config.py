import os
import logging
import sys

import structlog


def get_logger(name: str = "sondage"):
    """Get a structured logger instance

    Usage:
        logger = get_logger(__name__)
        logger = logger.bind(component="statistics")
        logger.info("computed question stats", question_id="q_abc", n=12)

    Args:
        name: Logger name (typically __name__ or module path)

    Returns:
        Structured logger instance with context binding support
    """
    return structlog.get_logger(name)


class Config:
    """Configuration management for sondage"""

    def __init__(self):
        # API configuration
        self.API_HOST = os.getenv("SONDAGE_HOST", "0.0.0.0")
        self.API_PORT = int(os.getenv("SONDAGE_PORT", "8000"))
        self.DEBUG = os.getenv("SONDAGE_DEBUG", "false").lower() == "true"

        # Input limits applied at the ingestion boundary
        self.MAX_QUESTION_LENGTH = int(os.getenv("SONDAGE_MAX_QUESTION_LENGTH", "500"))
        self.MAX_TAGS = int(os.getenv("SONDAGE_MAX_TAGS", "10"))
        self.MAX_TAG_LENGTH = int(os.getenv("SONDAGE_MAX_TAG_LENGTH", "40"))

        # CORS settings
        self.ALLOWED_ORIGINS = self._parse_origins(
            os.getenv(
                "SONDAGE_ALLOWED_ORIGINS",
                "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000",
            )
        )

        # Logging
        self.LOG_LEVEL = os.getenv("SONDAGE_LOG_LEVEL", "INFO").upper()

        self._validate()

    def _parse_origins(self, origins_str: str) -> list:
        """Parse comma-separated origins string"""
        if not origins_str:
            return []
        return [origin.strip() for origin in origins_str.split(",") if origin.strip()]

    def _validate(self):
        """Validate configuration values"""
        if self.API_PORT <= 0 or self.API_PORT > 65535:
            raise ValueError("SONDAGE_PORT must be between 1 and 65535")

        if self.MAX_QUESTION_LENGTH <= 0:
            raise ValueError("SONDAGE_MAX_QUESTION_LENGTH must be positive")

        if self.MAX_TAGS < 0:
            raise ValueError("SONDAGE_MAX_TAGS cannot be negative")

        if self.MAX_TAG_LENGTH <= 0:
            raise ValueError("SONDAGE_MAX_TAG_LENGTH must be positive")

        if self.LOG_LEVEL not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"SONDAGE_LOG_LEVEL has unknown level {self.LOG_LEVEL}")

    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.DEBUG or "localhost" in str(self.ALLOWED_ORIGINS)

    def summary(self) -> dict:
        """Get a summary of current configuration"""
        return {
            "api_host": self.API_HOST,
            "api_port": self.API_PORT,
            "debug": self.DEBUG,
            "max_question_length": self.MAX_QUESTION_LENGTH,
            "max_tags": self.MAX_TAGS,
            "max_tag_length": self.MAX_TAG_LENGTH,
            "allowed_origins_count": len(self.ALLOWED_ORIGINS),
            "log_level": self.LOG_LEVEL,
            "is_development": self.is_development(),
        }


def configure_structlog(is_development: bool = False, log_level: str = "INFO"):
    """Configure structlog for structured logging

    Args:
        is_development: If True, use human-readable console output. If False, use JSON.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    # No timestamp processor - the process supervisor adds timestamps
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    if is_development:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"], drop_missing=True),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )


# Global configuration instance
config = Config()

configure_structlog(
    is_development=config.is_development(),
    log_level=config.LOG_LEVEL
)
