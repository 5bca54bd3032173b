"""Non-fatal conversion warnings, aggregated by code."""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

WARN_MEDIA_UNRESOLVED = "WARN_MEDIA_UNRESOLVED"
WARN_ELEMENT_FAILED = "WARN_ELEMENT_FAILED"
WARN_SLIDE_FAILED = "WARN_SLIDE_FAILED"
WARN_STYLE_RESOLUTION = "WARN_STYLE_RESOLUTION"
WARN_UNSUPPORTED_ELEMENT = "WARN_UNSUPPORTED_ELEMENT"
WARN_CHART_PARTIAL = "WARN_CHART_PARTIAL"


@dataclass
class ConversionWarning:
    code: str
    message: str
    count: int = 1

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "count": self.count}


class WarningCollector:
    """
    Append-only warning list shared by parsing and conversion.

    Repeated codes bump the count of the first entry and keep its message.
    """

    def __init__(self):
        self._warnings: dict[str, ConversionWarning] = {}

    def add(self, code: str, message: str) -> None:
        existing = self._warnings.get(code)
        if existing is not None:
            existing.count += 1
        else:
            self._warnings[code] = ConversionWarning(code=code, message=message)
        logger.warning("%s: %s", code, message)

    def count(self, code: str) -> int:
        warning = self._warnings.get(code)
        return warning.count if warning is not None else 0

    def __len__(self) -> int:
        return len(self._warnings)

    @property
    def warnings(self) -> list[ConversionWarning]:
        return list(self._warnings.values())

    def to_list(self) -> list[dict]:
        return [warning.to_dict() for warning in self._warnings.values()]
