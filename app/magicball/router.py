from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, Request

from app.api.schemas import RELAY_ERROR_RESPONSES, RelayTextOut
from app.core.language import pick_language
from app.core.llm.deps import get_app_settings, get_completion_client
from app.core.settings import Settings
from app.domain.exceptions import RelayError
from app.magicball.schemas import OracleRequest
from app.magicball.service import ENDPOINT, MagicBallService

router = APIRouter(tags=["magicball"])
logger = logging.getLogger("app.magicball")


@router.post(
    "/magicball",
    response_model=RelayTextOut,
    responses=RELAY_ERROR_RESPONSES,
    summary="Ask the symbolic oracle",
)
async def ask_magicball(
    request: Request,
    payload: OracleRequest | None = Body(default=None),
    settings: Settings = Depends(get_app_settings),
    llm_client=Depends(get_completion_client),
) -> RelayTextOut:
    """
    Relay a free-form question to the oracle persona and return its answer.

    IMPORTANT: the question and the answer are never logged.
    """

    # An absent body behaves like `{}` so the caller gets "Missing question".
    payload = payload or OracleRequest()
    log_extra = {
        "request_id": getattr(request.state, "request_id", None),
        "endpoint": ENDPOINT,
        "language": pick_language(payload.lang),
    }

    svc = MagicBallService(settings=settings, llm_client=llm_client)
    try:
        text = await svc.ask(question=payload.question, lang=payload.lang)
    except RelayError as exc:
        request.state.relay_outcome = type(exc).__name__
        logger.info("Magicball relay failed", extra={**log_extra, "outcome": type(exc).__name__})
        raise

    request.state.relay_outcome = "success"
    logger.info(
        "Magicball relay succeeded",
        extra={**log_extra, "model": svc.model_for(), "outcome": "success"},
    )
    return RelayTextOut(text=text)
