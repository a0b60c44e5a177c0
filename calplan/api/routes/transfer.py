"""Backup download and restore endpoints."""
import logging

from fastapi import APIRouter, File, HTTPException, Request, Response, UploadFile

from calplan.exceptions import ImportParseError
from calplan.utilities.constants import EXPORT_MEDIA_TYPE, IMPORT_FAILED, IMPORT_SUCCEEDED
from calplan.utilities.export_import import PlanImporter, export_csv_text, export_filename, export_text

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


def _attachment(content: str, filename: str, media_type: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/export")
def export_backup(request: Request):
    store = request.app.state.plans.store
    return _attachment(export_text(store), export_filename(), EXPORT_MEDIA_TYPE)


@router.get("/export/csv")
def export_backup_csv(request: Request):
    store = request.app.state.plans.store
    return _attachment(export_csv_text(store), export_filename().replace(".json", ".csv"), "text/csv")


@router.post("/import")
async def import_backup(request: Request, file: UploadFile = File(...)):
    """Replace every plan with the uploaded backup (no merge, no confirmation)."""
    importer: PlanImporter = request.app.state.importer
    content = await file.read()
    try:
        store = importer.import_text(content)
    except ImportParseError as e:
        logger.info(f"Import of {file.filename!r} failed: {e}")
        raise HTTPException(status_code=400, detail=IMPORT_FAILED)
    return {"message": IMPORT_SUCCEEDED, "days": len(store)}
