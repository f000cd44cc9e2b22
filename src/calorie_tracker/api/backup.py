"""Backup export, import and reset endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import Response

from calorie_tracker.api.schemas import ResetRequest
from calorie_tracker.services.store import BackupImportError

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(prefix="/backup", tags=["backup"])

_logger = logging.getLogger(__name__)


@router.get("")
async def export_backup(request: Request) -> Response:
    """Return every stored key as a downloadable JSON document."""
    container: AppContainer = request.app.state.container
    filename = container.store.backup_filename(container.clock().date())
    return Response(
        content=container.store.export_json(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import")
async def import_backup(request: Request) -> dict[str, object]:
    """Overwrite stored keys from a backup and reload state."""
    container: AppContainer = request.app.state.container
    body = await request.body()
    try:
        imported = container.store.import_all(body)
    except BackupImportError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    container.store.load()
    _logger.info("Backup imported and state reloaded: keys=%s", imported)
    return {"imported": imported}


@router.post("/reset")
async def reset(payload: ResetRequest, request: Request) -> dict[str, object]:
    """Delete all stored state, returning a backup when requested."""
    container: AppContainer = request.app.state.container
    backup = container.store.reset_all(keep_backup=payload.keep_backup)
    return {"status": "ok", "backup": backup}
