"""Caption rendering endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from captionfx.services.errors import CaptionError
from captionfx.services.motion import MotionState
from captionfx.services.subtitles import cues_from_payload, format_ass_time, generate_ass, render_cues
from captionfx.services.timing import Cue

router = APIRouter()
logger = logging.getLogger(__name__)


async def _read_payload(request: Request) -> Tuple[List[Cue], Dict[str, Any], Optional[str], Optional[MotionState]]:
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body must be JSON")
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")
    items = payload.get("cues")
    if not isinstance(items, list) or not items:
        raise HTTPException(status_code=400, detail="cues must be a non-empty list")
    style = payload.get("style") or {}
    if not isinstance(style, dict):
        raise HTTPException(status_code=400, detail="style must be an object")
    try:
        cues = cues_from_payload(items)
    except CaptionError:
        raise
    except (KeyError, TypeError, ValueError):
        raise HTTPException(status_code=400, detail="Each cue needs text, start and end")
    cursor = None
    raw_cursor = payload.get("cursor")
    if raw_cursor is not None:
        try:
            cursor = MotionState(float(raw_cursor["x"]), float(raw_cursor["y"]))
        except (KeyError, TypeError, ValueError):
            raise HTTPException(status_code=400, detail="cursor must have numeric x and y")
    return cues, style, payload.get("animation"), cursor


def _error_response(exc: CaptionError) -> JSONResponse:
    logger.warning("Rejected caption request: %s", exc)
    return JSONResponse(status_code=422, content={"error": exc.error_payload})


@router.post("/captions/events")
async def caption_events(request: Request) -> Any:
    """Render cues to dialogue events and return them with the final cursor."""
    try:
        cues, style, animation, cursor = await _read_payload(request)
        events, final_cursor = render_cues(cues, style, animation, cursor)
    except CaptionError as exc:
        return _error_response(exc)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Caption rendering failed")
        raise HTTPException(status_code=500, detail="Caption rendering failed")
    return {
        "events": [event.to_dict() for event in events],
        "lines": [event.to_line(format_ass_time) for event in events],
        "cursor": final_cursor.to_dict() if final_cursor else None,
    }


@router.post("/captions/ass")
async def caption_ass(request: Request) -> Any:
    """Render cues to a complete ASS document."""
    try:
        cues, style, animation, cursor = await _read_payload(request)
        document = generate_ass(cues, style, animation, cursor)
    except CaptionError as exc:
        return _error_response(exc)
    except HTTPException:
        raise
    except Exception:
        logger.exception("ASS generation failed")
        raise HTTPException(status_code=500, detail="ASS generation failed")
    return PlainTextResponse(document)
