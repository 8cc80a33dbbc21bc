# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Game endpoints — dashboard, votes, availability, scheduling.
Thin HTTP layer — delegates ALL logic to GameService.
"""

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from gamenight.core.dependencies import (
    get_current_user,
    get_event_bus,
    get_game_service,
    require_gm,
)
from gamenight.models.domain import User
from gamenight.schemas.games import (
    AssignPlayerRequest,
    AvailabilityResponse,
    GameCreateRequest,
    GameResponse,
    GameSummary,
    PlayerGameView,
    ScheduleRequest,
    VoteRequest,
    WebhookUpdateRequest,
)
from gamenight.services.events import EventBus
from gamenight.services.game_service import GameService

router = APIRouter(prefix="/api/v1", tags=["Games"])


# ── Dashboard ──

@router.get("/games", response_model=list[GameSummary])
def list_my_games(
    user: User = Depends(get_current_user),
    service: GameService = Depends(get_game_service),
):
    """Games the caller owns or is assigned to."""
    return service.list_games_for(user)


@router.post("/games", status_code=201, response_model=GameResponse)
def create_game(
    payload: GameCreateRequest,
    user: User = Depends(require_gm),
    service: GameService = Depends(get_game_service),
):
    return service.create_game(
        owner=user.username,
        name=payload.name,
        effect=payload.effect,
        webhook_url=payload.webhook_url,
    )


# ── Player view & votes ──

@router.get("/games/{game_id}", response_model=PlayerGameView)
def get_game(
    game_id: str,
    user: User = Depends(get_current_user),
    service: GameService = Depends(get_game_service),
):
    try:
        game = service.get_game(game_id, user)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return PlayerGameView(
        id=game.id,
        name=game.name,
        owner=game.owner,
        effect=game.effect,
        scheduled_day=game.scheduled_day,
        players=game.players,
        my_votes=game.votes.get(user.username, []),
    )


@router.put("/games/{game_id}/votes", response_model=PlayerGameView)
def submit_vote(
    game_id: str,
    payload: VoteRequest,
    user: User = Depends(get_current_user),
    service: GameService = Depends(get_game_service),
):
    """Replace the caller's available days for this game."""
    try:
        game = service.submit_vote(game_id, user.username, payload.days)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return PlayerGameView(
        id=game.id,
        name=game.name,
        owner=game.owner,
        effect=game.effect,
        scheduled_day=game.scheduled_day,
        players=game.players,
        my_votes=game.votes[user.username],
    )


# ── GM: availability & scheduling ──

@router.get("/games/{game_id}/availability", response_model=AvailabilityResponse)
def get_availability(
    game_id: str,
    user: User = Depends(require_gm),
    service: GameService = Depends(get_game_service),
):
    """Common days, per-day match scores, and why nothing fits when it doesn't."""
    try:
        return service.availability_report(game_id, user.username)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.post("/games/{game_id}/schedule", response_model=GameResponse)
def schedule_session(
    game_id: str,
    payload: ScheduleRequest,
    background_tasks: BackgroundTasks,
    user: User = Depends(require_gm),
    service: GameService = Depends(get_game_service),
    events: EventBus = Depends(get_event_bus),
):
    """Commit or clear the session day. The webhook fires after the response."""
    try:
        game = service.schedule(
            game_id, user.username, payload.scheduled_day, payload.annotation
        )
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if events.pending():
        background_tasks.add_task(events.drain)
    return game


@router.put("/games/{game_id}/webhook", response_model=GameResponse)
def update_webhook(
    game_id: str,
    payload: WebhookUpdateRequest,
    user: User = Depends(require_gm),
    service: GameService = Depends(get_game_service),
):
    try:
        return service.update_webhook(game_id, user.username, payload.webhook_url)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.post("/games/{game_id}/players", response_model=GameResponse)
def assign_player(
    game_id: str,
    payload: AssignPlayerRequest,
    user: User = Depends(require_gm),
    service: GameService = Depends(get_game_service),
):
    try:
        return service.assign_player(game_id, user.username, payload.username)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.delete("/games/{game_id}/votes", response_model=GameResponse)
def reset_votes(
    game_id: str,
    user: User = Depends(require_gm),
    service: GameService = Depends(get_game_service),
):
    try:
        return service.reset_votes(game_id, user.username)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.delete("/games/{game_id}")
def delete_game(
    game_id: str,
    user: User = Depends(require_gm),
    service: GameService = Depends(get_game_service),
):
    try:
        return service.delete_game(game_id, user.username)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.get("/games/{game_id}/history")
def get_game_history(
    game_id: str,
    limit: Optional[int] = Query(default=None, ge=1, description="Max results"),
    user: User = Depends(require_gm),
    service: GameService = Depends(get_game_service),
):
    """Audit log for one game."""
    try:
        return service.history(game_id, user.username, limit=limit)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
