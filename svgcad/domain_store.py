from pathlib import Path
import os

BASE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_WORKDIR = BASE_DIR / "drawings"


def workdir() -> Path:
    configured = os.getenv("SVGCAD_WORKDIR")
    if not configured:
        return DEFAULT_WORKDIR
    return BASE_DIR / configured


def dxf_output_name(filename: str) -> str:
    return f"{filename}.dxf"


def pdf_output_name(filename: str) -> str:
    return f"{filename}.pdf"


def dxf_output_path(filename: str) -> Path:
    return workdir() / dxf_output_name(filename)


def pdf_output_path(filename: str) -> Path:
    return workdir() / pdf_output_name(filename)
