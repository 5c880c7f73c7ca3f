import logging
import os


_OUTPUT_FORMATS = ("table", "json")
_TRUTHY = ("1", "true", "yes", "on")


class OASTConfig:
    def __init__(
        self,
        log_level: str | None = None,
        output_format: str | None = None,
        show_invalid: bool | None = None,
    ):
        self.log_level = (log_level or os.getenv("OASTID_LOG_LEVEL", "WARNING")).upper()

        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

        self.output_format = (output_format or os.getenv("OASTID_OUTPUT", "table")).lower()

        if self.output_format not in _OUTPUT_FORMATS:
            raise ValueError(
                f"OASTID_OUTPUT must be one of {', '.join(_OUTPUT_FORMATS)}, got {self.output_format!r}"
            )

        if show_invalid is None:
            show_invalid = os.getenv("OASTID_SHOW_INVALID", "true").strip().lower() in _TRUTHY
        self.show_invalid = show_invalid

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)
