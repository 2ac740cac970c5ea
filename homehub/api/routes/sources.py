"""
Source entity endpoints.

Vehicles, policies, subscriptions, documents and properties whose dates
feed reminder generation.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from homehub.api.dependencies import get_rem_store, get_source_store
from homehub.application.dto.requests import (
    CreateSourceEntityRequest,
    UpdateSourceEntityRequest,
)
from homehub.application.dto.responses import (
    ErrorResponse,
    SourceEntityListResponse,
    SourceEntityResponse,
)
from homehub.config import get_logger
from homehub.core.dates import parse_date
from homehub.core.entities.source_entity import SourceEntity, SourceEntityType
from homehub.core.exceptions import InvalidDateError, SourceEntityNotFoundError
from homehub.core.interfaces import IReminderStore, ISourceEntityStore

logger = get_logger(__name__)

router = APIRouter(prefix="/api/sources", tags=["sources"])


def _entity_to_response(entity: SourceEntity) -> SourceEntityResponse:
    """Convert entity to response DTO."""
    return SourceEntityResponse(
        id=entity.id or 0,
        entity_type=entity.entity_type.value,
        name=entity.name,
        category=entity.category,
        dates=entity.dates,
        notes=entity.notes,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )


def _parse_dates(
    entity_type: SourceEntityType,
    raw: dict[str, str | None],
) -> dict[str, date | None]:
    """Parse ISO date values, rejecting fields the entity type does not have."""
    template = SourceEntity(entity_type=entity_type, name="-", dates=dict.fromkeys(raw))
    unknown = template.unknown_date_fields()
    if unknown:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown date fields for {entity_type.value}: {', '.join(unknown)}",
        )

    parsed: dict[str, date | None] = {}
    for name, value in raw.items():
        if value is None or value == "":
            parsed[name] = None
            continue
        try:
            parsed[name] = parse_date(value, field=name)
        except InvalidDateError as e:
            raise HTTPException(status_code=422, detail=e.message) from None
    return parsed


@router.post(
    "",
    response_model=SourceEntityResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def create_source_entity(
    request: CreateSourceEntityRequest,
    store: ISourceEntityStore = Depends(get_source_store),
) -> SourceEntityResponse:
    """Create a source entity."""
    entity = SourceEntity(
        entity_type=request.entity_type,
        name=request.name,
        category=request.category,
        dates=_parse_dates(request.entity_type, request.dates),
        notes=request.notes,
    )
    created = await store.create(entity)
    return _entity_to_response(created)


@router.get("", response_model=SourceEntityListResponse)
async def list_source_entities(
    entity_type: SourceEntityType | None = None,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    store: ISourceEntityStore = Depends(get_source_store),
) -> SourceEntityListResponse:
    """List source entities, optionally of one type."""
    entities = await store.list_entities(entity_type=entity_type, limit=limit, offset=offset)
    return SourceEntityListResponse(
        entities=[_entity_to_response(e) for e in entities],
        total=len(entities),
    )


@router.get(
    "/{entity_id}",
    response_model=SourceEntityResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_source_entity(
    entity_id: int,
    store: ISourceEntityStore = Depends(get_source_store),
) -> SourceEntityResponse:
    """Get a source entity by ID."""
    entity = await store.get(entity_id)
    if entity is None:
        raise SourceEntityNotFoundError(entity_id)
    return _entity_to_response(entity)


@router.put(
    "/{entity_id}",
    response_model=SourceEntityResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def update_source_entity(
    entity_id: int,
    request: UpdateSourceEntityRequest,
    store: ISourceEntityStore = Depends(get_source_store),
) -> SourceEntityResponse:
    """Update a source entity. Date fields are merged into the stored ones."""
    entity = await store.get(entity_id)
    if entity is None:
        raise SourceEntityNotFoundError(entity_id)

    if request.name is not None:
        entity.name = request.name
    if request.category is not None:
        entity.category = request.category
    if request.notes is not None:
        entity.notes = request.notes
    if request.dates is not None:
        entity.dates = {**entity.dates, **_parse_dates(entity.entity_type, request.dates)}

    updated = await store.update(entity)
    return _entity_to_response(updated)


@router.delete(
    "/{entity_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_source_entity(
    entity_id: int,
    store: ISourceEntityStore = Depends(get_source_store),
    reminder_store: IReminderStore = Depends(get_rem_store),
) -> None:
    """Delete a source entity. Reminders generated from it are kept."""
    entity = await store.get(entity_id)
    if entity is None:
        raise SourceEntityNotFoundError(entity_id)

    await store.delete(entity_id)
    linked = await reminder_store.find_by_linked_entity(entity.entity_type.value, entity_id)
    if linked:
        logger.info(
            "source_entity_deleted_with_reminders",
            entity_id=entity_id,
            reminders=len(linked),
        )
