"""Animation catalogue and style preset endpoints."""

from typing import Any, Dict

from fastapi import APIRouter

from captionfx.services.presets import builtin_presets
from captionfx.services.registry import LEGACY_ANIMATIONS, available_strategies

router = APIRouter()


@router.get("/animations")
def list_animations() -> Dict[str, Any]:
    return {"animations": available_strategies(), "legacy": LEGACY_ANIMATIONS}


@router.get("/presets")
def list_presets() -> Dict[str, Any]:
    return {"presets": builtin_presets()}
