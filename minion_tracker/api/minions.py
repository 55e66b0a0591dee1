"""
HTTP endpoints for the minion tracker.

Every handler returns an HTML fragment that htmx swaps into the page.
Form fields are coerced by the schemas (non-numeric input becomes 0);
the store does no validation.
"""

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request, Response, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from minion_tracker.core.database import get_db
from minion_tracker.core.logging_config import get_logger
from minion_tracker.schemas.minion import (
    HpAdjustForm,
    MinionCreateForm,
    MinionRecord,
    MinionUpdateForm,
    coerce_int,
)
from minion_tracker.services.minion_store import MinionStore

router = APIRouter()
logger = get_logger(__name__)

TEMPLATES_DIRECTORY = Path(__file__).resolve().parent.parent / "templates"


def hp_percent(minion: MinionRecord) -> int:
    """HP as a whole percentage of max HP, for the HP bar."""
    if minion.max_hp <= 0:
        return 0
    return max(0, min(100, minion.hp * 100 // minion.max_hp))


def hp_state(minion: MinionRecord) -> str:
    """Display state: down at 0 HP, bloodied at half or less, otherwise healthy."""
    if minion.hp <= 0:
        return "down"
    if minion.hp <= minion.max_hp // 2:
        return "bloodied"
    return "healthy"


templates = Jinja2Templates(directory=str(TEMPLATES_DIRECTORY))
templates.env.globals.update(hp_percent=hp_percent, hp_state=hp_state)


def get_store(db: AsyncSession = Depends(get_db)) -> MinionStore:
    """Dependency providing a store bound to the request's session."""
    return MinionStore(db)


def parse_minion_id(minion_id: str) -> int:
    """Path id as an integer; anything unparseable becomes 0, which matches no minion."""
    return coerce_int(minion_id)


StoreDep = Annotated[MinionStore, Depends(get_store)]
MinionId = Annotated[int, Depends(parse_minion_id)]


def render(request: Request, template: str, **context) -> HTMLResponse:
    return templates.TemplateResponse(request, template, context)


@router.get("/", response_class=HTMLResponse, summary="Minion tracker page")
async def index(request: Request, store: StoreDep) -> HTMLResponse:
    """Full page listing all active minions."""
    minions = await store.list_active()
    logger.debug("Index rendered", extra={"minion_count": len(minions)})
    return render(request, "layout.html", minions=minions)


@router.post("/minions", response_class=HTMLResponse, summary="Create a minion")
async def create_minion(
    request: Request,
    store: StoreDep,
    form: Annotated[MinionCreateForm, Form()],
) -> HTMLResponse:
    """
    Create a minion from the add form. Max HP is set to the submitted HP.
    """
    minion = await store.create(form.to_create())
    return render(request, "partials/minion_row.html", minion=minion)


@router.get("/minions/{minion_id}/edit", response_class=HTMLResponse)
async def edit_form(request: Request, minion_id: MinionId, store: StoreDep) -> HTMLResponse:
    minion = await store.get(minion_id)
    return render(request, "partials/minion_edit.html", minion=minion)


@router.put("/minions/{minion_id}", response_class=HTMLResponse, summary="Save a minion")
async def update_minion(
    request: Request,
    minion_id: MinionId,
    store: StoreDep,
    form: Annotated[MinionUpdateForm, Form()],
) -> HTMLResponse:
    """
    Overwrite a minion with the edit form's values. HP is saved as entered,
    even above max HP.
    """
    await store.get(minion_id)

    record = form.to_record(minion_id)
    await store.replace(record)
    return render(request, "partials/minion_row.html", minion=record)


@router.delete("/minions/{minion_id}", summary="Remove a minion from the list")
async def delete_minion(minion_id: MinionId, store: StoreDep) -> Response:
    """Soft delete; htmx removes the row on the empty 200 response."""
    await store.soft_delete(minion_id)
    return Response(status_code=status.HTTP_200_OK)


@router.get("/minions/{minion_id}/view", response_class=HTMLResponse)
async def view_minion(request: Request, minion_id: MinionId, store: StoreDep) -> HTMLResponse:
    minion = await store.get(minion_id)
    return render(request, "partials/minion_row.html", minion=minion)


@router.get("/minions/{minion_id}/hp/adjust", response_class=HTMLResponse)
async def hp_adjust_form(request: Request, minion_id: MinionId, store: StoreDep) -> HTMLResponse:
    minion = await store.get(minion_id)
    return render(request, "partials/hp_adjust.html", minion=minion)


@router.get("/minions/{minion_id}/hp/cancel", response_class=HTMLResponse)
async def hp_adjust_cancel(request: Request, minion_id: MinionId, store: StoreDep) -> HTMLResponse:
    minion = await store.get(minion_id)
    return render(request, "partials/hp_stat.html", minion=minion)


@router.post("/minions/{minion_id}/hp/heal", response_class=HTMLResponse)
async def heal_minion(
    request: Request,
    minion_id: MinionId,
    store: StoreDep,
    form: Annotated[HpAdjustForm, Form()],
) -> HTMLResponse:
    minion = await store.adjust_hp(minion_id, form.amount)
    return render(request, "partials/minion_row.html", minion=minion)


@router.post("/minions/{minion_id}/hp/dmg", response_class=HTMLResponse)
async def damage_minion(
    request: Request,
    minion_id: MinionId,
    store: StoreDep,
    form: Annotated[HpAdjustForm, Form()],
) -> HTMLResponse:
    minion = await store.adjust_hp(minion_id, -form.amount)
    return render(request, "partials/minion_row.html", minion=minion)
