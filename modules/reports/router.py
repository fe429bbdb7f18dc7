from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from core import latency
from core.database import get_store
from core.settings import READ
from modules.catalog.service import RecordStore
from modules.reports.excel import build_bom_sheet_excel

router = APIRouter(tags=["reports"])


@router.get("/variants/{variant_id}/bom-sheet")
async def download_bom_sheet(variant_id: int, store: RecordStore = Depends(get_store)):
    await latency.simulate(store.settings, READ)
    stream = build_bom_sheet_excel(store.bom_sheet(variant_id))
    filename = f"bom_{variant_id}.xlsx"
    return StreamingResponse(
        stream,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
