from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel
from typing import Optional
import logging

from svgcad.convert_api.file_service import commit_staged, list_svg_files, save_text_atomic, staging_path
from svgcad.convert_api.file_validation import validate_filename
from svgcad.domain_store import dxf_output_name, dxf_output_path, pdf_output_name, pdf_output_path, workdir
from svgcad.services.config import load_converter_config
from svgcad.services.errors import SvgConversionError
from svgcad.services.pdf_export import convert_svg_to_pdf
from svgcad.services.svg_to_dxf import convert_svg_to_dxf

router = APIRouter()
logger = logging.getLogger(__name__)


class ConvertRequest(BaseModel):
    svgContent: Optional[str] = None
    filename: Optional[str] = None


def failure_response(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    content = {"success": False, "message": message}
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)


def _missing_input() -> JSONResponse:
    return failure_response(400, "SVG content and filename are required")


@router.get("/list-svg-files")
def list_files():
    try:
        files = list_svg_files(workdir())
    except OSError as exc:
        logger.warning("Listing SVG files failed", exc_info=True)
        return failure_response(500, "Could not read the drawings directory", str(exc))
    return {"success": True, "files": files}


@router.post("/convert-svg-to-dxf")
def convert_to_dxf(data: ConvertRequest):
    if not data.svgContent or not data.filename:
        return _missing_input()

    filename = validate_filename(data.filename)
    logger.info("Converting %s to DXF (%d chars)", filename, len(data.svgContent))

    try:
        dxf_content = convert_svg_to_dxf(data.svgContent, config=load_converter_config())
    except SvgConversionError:
        raise
    except Exception as exc:
        logger.warning("DXF conversion failed for %s", filename, exc_info=True)
        raise SvgConversionError("SVG could not be converted to DXF", error=str(exc)) from exc

    output_path = save_text_atomic(dxf_output_path(filename), dxf_content)
    logger.info("DXF written to %s", output_path)

    return {
        "success": True,
        "message": "SVG converted to DXF",
        "dxfFilename": dxf_output_name(filename),
    }


@router.post("/convert-svg-to-pdf")
def convert_to_pdf(data: ConvertRequest):
    if not data.svgContent or not data.filename:
        return _missing_input()

    filename = validate_filename(data.filename)
    target = pdf_output_path(filename)
    staged = staging_path(target)

    try:
        convert_svg_to_pdf(data.svgContent, staged, config=load_converter_config())
    except Exception as exc:
        staged.unlink(missing_ok=True)
        if isinstance(exc, (SvgConversionError, HTTPException)):
            raise
        logger.warning("PDF conversion failed for %s", filename, exc_info=True)
        raise SvgConversionError("SVG could not be converted to PDF", error=str(exc)) from exc

    commit_staged(staged, target)
    logger.info("PDF written to %s", target)

    return {
        "success": True,
        "message": "SVG converted to PDF",
        "pdfFilename": pdf_output_name(filename),
    }


@router.get("/files/{filename}")
def download_file(filename: str):
    name = validate_filename(filename)
    path = workdir() / name
    if not path.exists() or not path.is_file():
        raise HTTPException(status_code=404, detail=f"File {name} not found")
    return FileResponse(path, filename=name)
