from fastapi import HTTPException
import re

MAX_FILENAME_LENGTH = 200
_FORBIDDEN_RE = re.compile(r"[\\/\x00]")


def validate_filename(filename: str) -> str:
    normalized = (filename or "").strip()
    if not normalized:
        raise HTTPException(status_code=400, detail="Filename must not be empty")
    if _FORBIDDEN_RE.search(normalized) or normalized in (".", "..") or normalized.startswith(".."):
        raise HTTPException(
            status_code=400,
            detail="Filename must not contain path separators or start with '..'",
        )
    if len(normalized) > MAX_FILENAME_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Filename is longer than {MAX_FILENAME_LENGTH} characters",
        )
    return normalized
