import logging
import os
from dataclasses import dataclass

from .time_frames import TimeFrame

_LOG_FORMATS = ("json", "text")


@dataclass(frozen=True)
class Config:
    log_format: str = "json"
    log_level: str = "INFO"
    time_frame: TimeFrame = TimeFrame.ALL_TIME

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls) -> "Config":
        log_format = os.environ.get("PROGRESSION_LOG_FORMAT", "json").strip().lower()
        if log_format not in _LOG_FORMATS:
            raise RuntimeError("PROGRESSION_LOG_FORMAT must be one of: json, text")

        log_level = os.environ.get("PROGRESSION_LOG_LEVEL", "INFO").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise RuntimeError(f"PROGRESSION_LOG_LEVEL is not a valid level: {log_level}")

        try:
            time_frame = TimeFrame.parse(os.environ.get("PROGRESSION_TIME_FRAME", "all_time"))
        except ValueError as exc:
            raise RuntimeError(f"PROGRESSION_TIME_FRAME: {exc}") from exc

        return cls(log_format=log_format, log_level=log_level, time_frame=time_frame)
