from collections.abc import Callable
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger

from app.api.dependencies import get_clock, get_mix_service
from app.models.mix import MixResponse
from app.services.mix.service import MixService

router = APIRouter(tags=["mix"])

_FALSE_VALUES = {"0", "false", "no", "off"}


def _flag(raw: str | None, default: bool = True) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() not in _FALSE_VALUES


@router.get("/mix", response_model=MixResponse, response_model_exclude_none=True)
async def get_mix(
    time: str | None = Query(default=None, description="Override clock, 24-hour HH:MM"),
    tweak: str | None = Query(default=None, description="favor_new | favor_familiar | no_repeats"),
    engine: str | None = Query(default=None, description="primary | baseline"),
    situation: str | None = Query(default=None, description="Free-text situation, e.g. 'gym' or 'dinner'"),
    artwork: str | None = Query(default=None, description="Set to false to skip artwork lookups"),
    mix_service: MixService = Depends(get_mix_service),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Build the block mix for the current moment.

    Every parameter is optional and invalid values fall back to defaults
    instead of failing the request.
    """
    try:
        return await mix_service.get_mix(
            clock(),
            time=time,
            tweak=tweak,
            engine=engine,
            situation=situation,
            artwork=_flag(artwork),
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error building mix (time={time}, tweak={tweak}, engine={engine}, situation={situation}): {e}")
        raise HTTPException(status_code=500, detail="Failed to build mix")
