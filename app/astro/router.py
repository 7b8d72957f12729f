from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, Request

from app.api.schemas import RELAY_ERROR_RESPONSES, RelayTextOut
from app.astro.schemas import AstroRequest
from app.astro.service import ENDPOINT, AstroService
from app.core.language import pick_language
from app.core.llm.deps import get_app_settings, get_completion_client
from app.core.settings import Settings
from app.domain.exceptions import RelayError

router = APIRouter(tags=["astro"])
logger = logging.getLogger("app.astro")


@router.post(
    "/astro",
    response_model=RelayTextOut,
    responses=RELAY_ERROR_RESPONSES,
    summary="Interpret a precomputed natal chart",
)
async def interpret_chart(
    request: Request,
    payload: AstroRequest | None = Body(default=None),
    settings: Settings = Depends(get_app_settings),
    llm_client=Depends(get_completion_client),
) -> RelayTextOut:
    """
    Relay a precomputed birth chart to the interpreter persona.

    The chart is not computed or checked for astrological consistency here; only
    its shape is validated. Chart data and the reading are never logged.
    """

    payload = payload or AstroRequest()
    log_extra = {
        "request_id": getattr(request.state, "request_id", None),
        "endpoint": ENDPOINT,
        "language": pick_language(payload.lang),
    }

    svc = AstroService(settings=settings, llm_client=llm_client)
    try:
        text = await svc.interpret(
            birth_chart=payload.birth_chart,
            question=payload.question,
            lang=payload.lang,
        )
    except RelayError as exc:
        request.state.relay_outcome = type(exc).__name__
        logger.info("Astro relay failed", extra={**log_extra, "outcome": type(exc).__name__})
        raise

    request.state.relay_outcome = "success"
    logger.info(
        "Astro relay succeeded",
        extra={**log_extra, "model": svc.model_for(), "outcome": "success"},
    )
    return RelayTextOut(text=text)
