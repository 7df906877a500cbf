"""Meal analysis and plan endpoints."""

import logging

from fastapi import APIRouter, Depends, Request

from cravesmart.api.auth import get_container, require_session
from cravesmart.api.schemas import AnalysisRequestBody
from cravesmart.containers import AppContainer
from cravesmart.domain.analysis import AnalysisRequest, AnalysisResult
from cravesmart.domain.profiles import UserProfile
from cravesmart.errors import AnalysisInProgressError, NotFoundError
from cravesmart.services.analysis import decode_image
from cravesmart.services.plan_view import Direction, PlanSelection, render_result
from cravesmart.services.sessions import SessionContext

router = APIRouter(prefix="/analysis", tags=["analysis"])

_logger = logging.getLogger(__name__)


@router.post("")
async def run_analysis(
    body: AnalysisRequestBody,
    request: Request,
    session: SessionContext = Depends(require_session),
) -> dict[str, object]:
    """Analyse a meal photo or build a day plan for the session's user."""
    if session.loading:
        raise AnalysisInProgressError()
    container = get_container(request)
    profile = _resolve_profile(container, session, body)
    image = (
        decode_image(body.image_base64, body.image_mime_type)
        if body.image_base64
        else None
    )
    analysis_request = AnalysisRequest(
        plan_type=body.plan_type,
        meals_per_day=body.meals_per_day,
        description=body.description,
        image=image,
    )

    session.loading = True
    try:
        result = await container.analysis_service.analyze(analysis_request, profile)
    finally:
        session.loading = False
    session.store_result(result, body.plan_type)
    _logger.info(
        "Analysis completed for %s (%s)", session.username, body.plan_type
    )
    return _view(result, session.selection)


@router.get("")
async def current_analysis(
    session: SessionContext = Depends(require_session),
) -> dict[str, object]:
    """Return the session's current result view."""
    if session.result is None:
        raise NotFoundError("No analysis yet.")
    return _view(session.result, session.selection)


@router.post("/slots/{slot_index}/{direction}")
async def cycle_option(
    slot_index: int,
    direction: Direction,
    session: SessionContext = Depends(require_session),
) -> dict[str, object]:
    """Show the previous or next option of a meal slot."""
    result = session.result
    if result is None or not result.daily_plan:
        raise NotFoundError("No meal plan to adjust.")
    if session.selection is None:
        session.selection = PlanSelection.for_result(result)
    try:
        session.selection.cycle(result.daily_plan, slot_index, direction)
    except IndexError as exc:
        raise NotFoundError("Unknown meal slot.") from exc
    return _view(result, session.selection)


@router.delete("")
async def reset_analysis(
    session: SessionContext = Depends(require_session),
) -> dict[str, str]:
    """Forget the current result."""
    session.clear_result()
    return {"status": "ok"}


def _resolve_profile(
    container: AppContainer, session: SessionContext, body: AnalysisRequestBody
) -> UserProfile:
    if body.profile is not None:
        return body.profile
    if body.profile_id is not None:
        saved = container.account_service.get_profile(
            session.account_id, body.profile_id
        )
        return saved.as_profile()
    return UserProfile()


def _view(
    result: AnalysisResult, selection: PlanSelection | None
) -> dict[str, object]:
    return render_result(result, selection or PlanSelection.for_result(result))
