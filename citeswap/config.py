"""Configuration management for Citeswap."""
import os
from dataclasses import dataclass
from typing import Optional, Tuple
from dotenv import load_dotenv

from .exceptions import ConfigurationError

DEFAULT_PLACEHOLDER_MARKER = "ADDIN CitaviPlaceholder"
DOCUMENT_PART = "word/document.xml"
FOOTNOTES_PART = "word/footnotes.xml"


@dataclass
class Config:
    """Citeswap configuration.

    Attributes:
        placeholder_marker: Field code prefix identifying Citavi placeholders
        document_parts: Names of the .docx parts to patch, in processing order
        output_dir: Directory for converted documents and part files
        write_part_files: Also write each patched part as a standalone XML file
        payload_dump_dir: Directory to dump decoded payload JSON to (debugging)
        log_level: Logging level name
    """

    placeholder_marker: str = DEFAULT_PLACEHOLDER_MARKER
    document_parts: Tuple[str, ...] = (DOCUMENT_PART, FOOTNOTES_PART)

    # Output
    output_dir: str = "./output"
    write_part_files: bool = True
    payload_dump_dir: Optional[str] = None

    log_level: str = "INFO"

    def __post_init__(self):
        if not self.placeholder_marker:
            raise ConfigurationError("placeholder_marker must not be empty")
        self.document_parts = tuple(self.document_parts)
        if not self.document_parts:
            raise ConfigurationError("At least one document part must be configured")

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Config":
        """Load configuration from environment variables.

        Args:
            env_file: Path to .env file (optional)

        Returns:
            Config instance with values from environment
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        parts = os.getenv("CITESWAP_DOCUMENT_PARTS")

        return cls(
            placeholder_marker=os.getenv(
                "CITESWAP_PLACEHOLDER_MARKER", DEFAULT_PLACEHOLDER_MARKER
            ),
            document_parts=tuple(p.strip() for p in parts.split(",") if p.strip())
            if parts
            else (DOCUMENT_PART, FOOTNOTES_PART),
            output_dir=os.getenv("CITESWAP_OUTPUT_DIR", "./output"),
            write_part_files=os.getenv("CITESWAP_WRITE_PART_FILES", "true").lower()
            == "true",
            payload_dump_dir=os.getenv("CITESWAP_PAYLOAD_DUMP_DIR") or None,
            log_level=os.getenv("CITESWAP_LOG_LEVEL", "INFO"),
        )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Load configuration from dictionary.

        Args:
            config_dict: Dictionary with configuration values

        Returns:
            Config instance
        """
        return cls(**{k: v for k, v in config_dict.items() if k in cls.__annotations__})
