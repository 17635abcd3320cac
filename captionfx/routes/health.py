"""Health check endpoints."""

from typing import Any, Dict

from fastapi import APIRouter

from captionfx.config import FONTS_DIR, OUTPUTS_DIR
from captionfx.services.registry import REGISTRY

router = APIRouter()


@router.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@router.get("/ready")
def ready() -> Dict[str, Any]:
    checks: Dict[str, Any] = {"status": "ok"}
    checks["outputs_dir"] = OUTPUTS_DIR.exists()
    checks["fonts_dir"] = FONTS_DIR.exists()
    checks["animations"] = len(REGISTRY)
    if not checks["outputs_dir"]:
        checks["status"] = "degraded"
    return checks
