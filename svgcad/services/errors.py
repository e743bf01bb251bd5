from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SvgConversionError(Exception):
    message: str
    error: str = ""
    status_code: int = 500

    def __str__(self) -> str:
        if self.error:
            return f"{self.message}: {self.error}"
        return self.message


@dataclass
class SvgParseError(SvgConversionError):
    status_code: int = 422
