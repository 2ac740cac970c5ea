"""
Reminder endpoints: CRUD, status views, summary, calendar and generation.
"""

from datetime import date, datetime, time

from fastapi import APIRouter, Depends, HTTPException, Query, status

from homehub.api.dependencies import (
    Clock,
    get_clock,
    get_complete_reminder_use_case,
    get_dismiss_reminder_use_case,
    get_engine,
    get_generate_reminders_use_case,
    get_rem_store,
    get_snooze_reminder_use_case,
)
from homehub.application.dto.requests import (
    CreateReminderRequest,
    GenerateRemindersRequest,
    SnoozeReminderRequest,
    UpdateReminderRequest,
)
from homehub.application.dto.responses import (
    CalendarEventResponse,
    CalendarResponse,
    CompleteReminderResponse,
    DomainCountResponse,
    DomainStyleResponse,
    ErrorResponse,
    GenerateRemindersResponse,
    PriorityCountResponse,
    ReminderListResponse,
    ReminderResponse,
    ReminderSummaryResponse,
    SkippedReminderResponse,
)
from homehub.application.use_cases import (
    CompleteReminderUseCase,
    DismissReminderUseCase,
    GenerateRemindersUseCase,
    SnoozeReminderUseCase,
)
from homehub.config import get_settings
from homehub.core.dates import date_only, parse_date, split_date_time
from homehub.core.entities.calendar_event import CalendarView
from homehub.core.entities.reminder import Reminder, ReminderDomain, ReminderStatus
from homehub.core.exceptions import InvalidDateError, ReminderNotFoundError
from homehub.core.interfaces import IReminderStore
from homehub.core.services import (
    DOMAIN_STYLES,
    ReminderEngine,
    calendar_window,
    events_between,
)

router = APIRouter(prefix="/api/reminders", tags=["reminders"])


def _entity_to_response(
    reminder: Reminder,
    engine: ReminderEngine,
    now: datetime,
) -> ReminderResponse:
    """Convert entity to response DTO with computed status."""
    reminder_status = engine.classify(reminder, now)
    return ReminderResponse(
        **reminder.model_dump(exclude={"id", "domain", "priority", "recurrence_type"}),
        id=reminder.id or 0,
        domain=reminder.domain.value,
        priority=reminder.priority.value,
        recurrence_type=reminder.recurrence_type.value if reminder.recurrence_type else None,
        status=reminder_status.value,
        days_until=engine.days_until(reminder, now),
        is_overdue=reminder_status == ReminderStatus.OVERDUE,
        next_occurrence=engine.next_occurrence(reminder, now),
    )


def _parse_date(value: str, field: str) -> date:
    try:
        return parse_date(value, field=field)
    except InvalidDateError as e:
        raise HTTPException(status_code=422, detail=e.message) from None


def _parse_time(value: str | None) -> time | None:
    if not value:
        return None
    try:
        return time.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid reminder_time: {value!r}") from None


async def _get_or_404(store: IReminderStore, reminder_id: int) -> Reminder:
    reminder = await store.get(reminder_id)
    if reminder is None:
        raise ReminderNotFoundError(reminder_id)
    return reminder


@router.post(
    "",
    response_model=ReminderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def create_reminder(
    request: CreateReminderRequest,
    store: IReminderStore = Depends(get_rem_store),
    engine: ReminderEngine = Depends(get_engine),
    clock: Clock = Depends(get_clock),
) -> ReminderResponse:
    """Create a new reminder."""
    try:
        reminder_date, parsed_time = split_date_time(request.reminder_date)
    except InvalidDateError as e:
        raise HTTPException(status_code=422, detail=e.message) from None

    reminder_time = _parse_time(request.reminder_time) or parsed_time
    if request.is_recurring and request.recurrence_type is None:
        raise HTTPException(
            status_code=422,
            detail="recurrence_type is required for recurring reminders",
        )

    reminder = Reminder(
        title=request.title,
        domain=request.domain,
        description=request.description,
        reminder_date=reminder_date,
        reminder_time=reminder_time,
        is_all_day=request.is_all_day and reminder_time is None,
        entity_type=request.entity_type,
        entity_id=request.entity_id,
        entity_name=request.entity_name,
        is_recurring=request.is_recurring,
        recurrence_type=request.recurrence_type if request.is_recurring else None,
        recurrence_interval=request.recurrence_interval,
        recurrence_end_date=(
            _parse_date(request.recurrence_end_date, "recurrence_end_date")
            if request.recurrence_end_date
            else None
        ),
        notify_days_before=request.notify_days_before,
        priority=request.priority,
    )

    created = await store.create(reminder)
    return _entity_to_response(created, engine, clock())


@router.get("", response_model=ReminderListResponse)
async def list_reminders(
    include_resolved: bool = False,
    domain: ReminderDomain | None = None,
    reminder_status: ReminderStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=100, ge=1),
    offset: int = Query(default=0, ge=0),
    store: IReminderStore = Depends(get_rem_store),
    engine: ReminderEngine = Depends(get_engine),
    clock: Clock = Depends(get_clock),
) -> ReminderListResponse:
    """List reminders ordered by date, optionally by domain or status."""
    now = clock()
    limit = min(limit, get_settings().reminders.list_max_limit)
    if reminder_status is not None and reminder_status.is_resolved:
        include_resolved = True

    reminders = await store.list_reminders(
        include_resolved=include_resolved, domain=domain, limit=None
    )
    if reminder_status is not None:
        reminders = [r for r in reminders if engine.classify(r, now) == reminder_status]

    return ReminderListResponse(
        reminders=[_entity_to_response(r, engine, now) for r in reminders[offset : offset + limit]],
        total=len(reminders),
    )


@router.get("/upcoming", response_model=ReminderListResponse)
async def list_upcoming_reminders(
    days: int | None = Query(default=None, ge=0),
    limit: int | None = Query(default=None, ge=1),
    store: IReminderStore = Depends(get_rem_store),
    engine: ReminderEngine = Depends(get_engine),
    clock: Clock = Depends(get_clock),
) -> ReminderListResponse:
    """
    Active reminders due within ``days``, overdue ones included.

    Snoozed reminders are hidden until their snooze date.
    """
    settings = get_settings().reminders
    days = min(settings.upcoming_days if days is None else days, settings.upcoming_max_days)
    limit = settings.upcoming_limit if limit is None else limit

    now = clock()
    today = date_only(now)
    reminders = [
        r
        for r in await store.list_reminders(include_resolved=False, limit=None)
        if not r.is_snoozed_on(today) and engine.days_until(r, now) <= days
    ]
    reminders.sort(key=lambda r: (r.reminder_date, -r.priority.rank))

    return ReminderListResponse(
        reminders=[_entity_to_response(r, engine, now) for r in reminders[:limit]],
        total=len(reminders),
    )


@router.get("/overdue", response_model=ReminderListResponse)
async def list_overdue_reminders(
    limit: int = Query(default=100, ge=1),
    store: IReminderStore = Depends(get_rem_store),
    engine: ReminderEngine = Depends(get_engine),
    clock: Clock = Depends(get_clock),
) -> ReminderListResponse:
    """Active reminders whose date has passed."""
    now = clock()
    reminders = [
        r
        for r in await store.list_reminders(include_resolved=False, limit=None)
        if engine.is_overdue(r, now)
    ]
    return ReminderListResponse(
        reminders=[_entity_to_response(r, engine, now) for r in reminders[:limit]],
        total=len(reminders),
    )


@router.get("/summary", response_model=ReminderSummaryResponse)
async def get_reminder_summary(
    window_days: int | None = Query(default=None, ge=0, le=365),
    store: IReminderStore = Depends(get_rem_store),
    engine: ReminderEngine = Depends(get_engine),
    clock: Clock = Depends(get_clock),
) -> ReminderSummaryResponse:
    """Counts of active reminders by bucket, domain and priority."""
    reminders = await store.list_reminders(include_resolved=False, limit=None)
    summary = engine.summarize(reminders, clock(), window_days=window_days)
    return ReminderSummaryResponse(
        total=summary.total,
        overdue=summary.overdue,
        upcoming_today=summary.upcoming_today,
        upcoming_week=summary.upcoming_week,
        window_days=summary.window_days,
        by_domain=[DomainCountResponse(domain=d.domain, count=d.count) for d in summary.by_domain],
        by_priority=[
            PriorityCountResponse(priority=p.priority, count=p.count) for p in summary.by_priority
        ],
        skipped=[
            SkippedReminderResponse(reminder_id=s.reminder_id, value=s.value, reason=s.reason)
            for s in summary.skipped
        ],
    )


@router.get("/calendar", response_model=CalendarResponse)
async def get_calendar(
    view: CalendarView = CalendarView.MONTH,
    anchor: str | None = None,
    start: str | None = None,
    end: str | None = None,
    store: IReminderStore = Depends(get_rem_store),
    engine: ReminderEngine = Depends(get_engine),
    clock: Clock = Depends(get_clock),
) -> CalendarResponse:
    """
    Reminder occurrences for a day, week or month.

    An explicit ``start``/``end`` range overrides the view window.
    """
    now = clock()
    if start or end:
        if not (start and end):
            raise HTTPException(status_code=422, detail="start and end must be given together")
        range_start, range_end = _parse_date(start, "start"), _parse_date(end, "end")
        if range_end < range_start:
            raise HTTPException(status_code=422, detail="end must not be before start")
        response_view = None
    else:
        anchor_date = _parse_date(anchor, "anchor") if anchor else date_only(now)
        range_start, range_end = calendar_window(view, anchor_date)
        response_view = view.value

    reminders = await store.list_reminders(include_resolved=True, limit=None)
    events = events_between(reminders, range_start, range_end, now, engine=engine)

    return CalendarResponse(
        view=response_view,
        start=range_start,
        end=range_end,
        events=[
            CalendarEventResponse(
                reminder_id=e.reminder_id,
                title=e.title,
                event_date=e.event_date,
                event_time=e.event_time,
                domain=e.domain.value,
                priority=e.priority.value,
                status=e.status.value,
                is_occurrence=e.is_occurrence,
                entity_type=e.entity_type,
                entity_id=e.entity_id,
            )
            for e in events
        ],
    )


@router.get("/domains", response_model=list[DomainStyleResponse])
async def list_domain_styles() -> list[DomainStyleResponse]:
    """Label, icon and colours for every reminder domain."""
    return [
        DomainStyleResponse(
            domain=domain.value,
            label=style.label,
            icon=style.icon,
            color=style.color,
            bg_color=style.bg_color,
        )
        for domain, style in DOMAIN_STYLES.items()
    ]


@router.post("/generate", response_model=GenerateRemindersResponse)
async def generate_reminders(
    request: GenerateRemindersRequest | None = None,
    use_case: GenerateRemindersUseCase = Depends(get_generate_reminders_use_case),
    clock: Clock = Depends(get_clock),
) -> GenerateRemindersResponse:
    """Create or refresh reminders from source entity dates."""
    request = request or GenerateRemindersRequest()
    result = await use_case.execute(
        clock(),
        lookahead_days=request.lookahead_days,
        domains=request.domains or None,
    )
    return GenerateRemindersResponse(
        sources_scanned=result.sources_scanned,
        created=result.reminders_created,
        updated=result.reminders_updated,
        unchanged=result.unchanged,
        already_resolved=result.already_resolved,
        created_reminder_ids=result.created_reminder_ids,
        updated_reminder_ids=result.updated_reminder_ids,
    )


@router.get(
    "/{reminder_id}",
    response_model=ReminderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_reminder(
    reminder_id: int,
    store: IReminderStore = Depends(get_rem_store),
    engine: ReminderEngine = Depends(get_engine),
    clock: Clock = Depends(get_clock),
) -> ReminderResponse:
    """Get a reminder by ID."""
    reminder = await _get_or_404(store, reminder_id)
    return _entity_to_response(reminder, engine, clock())


@router.put(
    "/{reminder_id}",
    response_model=ReminderResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def update_reminder(
    reminder_id: int,
    request: UpdateReminderRequest,
    store: IReminderStore = Depends(get_rem_store),
    engine: ReminderEngine = Depends(get_engine),
    clock: Clock = Depends(get_clock),
) -> ReminderResponse:
    """Edit reminder fields."""
    existing = await _get_or_404(store, reminder_id)
    changes = request.model_dump(exclude_unset=True)

    if "reminder_date" in changes:
        if changes["reminder_date"] is None:
            raise HTTPException(status_code=422, detail="reminder_date cannot be cleared")
        try:
            changes["reminder_date"], parsed_time = split_date_time(
                changes["reminder_date"], reminder_id=reminder_id
            )
        except InvalidDateError as e:
            raise HTTPException(status_code=422, detail=e.message) from None
        if parsed_time is not None and "reminder_time" not in changes:
            changes["reminder_time"] = parsed_time
            changes.setdefault("is_all_day", False)
    if isinstance(changes.get("reminder_time"), str):
        changes["reminder_time"] = _parse_time(changes["reminder_time"])
    if changes.get("recurrence_end_date"):
        changes["recurrence_end_date"] = _parse_date(
            changes["recurrence_end_date"], "recurrence_end_date"
        )

    updated = Reminder.model_validate({**existing.model_dump(), **changes})
    if updated.is_recurring and updated.recurrence_type is None:
        raise HTTPException(
            status_code=422,
            detail="recurrence_type is required for recurring reminders",
        )

    saved = await store.update(updated)
    return _entity_to_response(saved, engine, clock())


@router.delete(
    "/{reminder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_reminder(
    reminder_id: int,
    store: IReminderStore = Depends(get_rem_store),
) -> None:
    """Delete a reminder."""
    deleted = await store.delete(reminder_id)
    if not deleted:
        raise ReminderNotFoundError(reminder_id)


@router.post(
    "/{reminder_id}/complete",
    response_model=CompleteReminderResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def complete_reminder(
    reminder_id: int,
    use_case: CompleteReminderUseCase = Depends(get_complete_reminder_use_case),
    engine: ReminderEngine = Depends(get_engine),
    clock: Clock = Depends(get_clock),
) -> CompleteReminderResponse:
    """Complete a reminder; recurring reminders get their next occurrence."""
    now = clock()
    result = await use_case.execute(reminder_id, now)
    return CompleteReminderResponse(
        reminder=_entity_to_response(result.reminder, engine, now),
        follow_up=_entity_to_response(result.follow_up, engine, now) if result.follow_up else None,
    )


@router.post(
    "/{reminder_id}/dismiss",
    response_model=ReminderResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def dismiss_reminder(
    reminder_id: int,
    use_case: DismissReminderUseCase = Depends(get_dismiss_reminder_use_case),
    engine: ReminderEngine = Depends(get_engine),
    clock: Clock = Depends(get_clock),
) -> ReminderResponse:
    """Dismiss a reminder."""
    now = clock()
    reminder = await use_case.execute(reminder_id, now)
    return _entity_to_response(reminder, engine, now)


@router.post(
    "/{reminder_id}/snooze",
    response_model=ReminderResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def snooze_reminder(
    reminder_id: int,
    request: SnoozeReminderRequest,
    use_case: SnoozeReminderUseCase = Depends(get_snooze_reminder_use_case),
    engine: ReminderEngine = Depends(get_engine),
    clock: Clock = Depends(get_clock),
) -> ReminderResponse:
    """Hide a reminder until a later date."""
    until = _parse_date(request.snooze_until, "snooze_until")
    now = clock()
    reminder = await use_case.execute(reminder_id, until, now)
    return _entity_to_response(reminder, engine, now)


@router.post(
    "/{reminder_id}/unsnooze",
    response_model=ReminderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def unsnooze_reminder(
    reminder_id: int,
    use_case: SnoozeReminderUseCase = Depends(get_snooze_reminder_use_case),
    engine: ReminderEngine = Depends(get_engine),
    clock: Clock = Depends(get_clock),
) -> ReminderResponse:
    """Clear a snooze."""
    now = clock()
    reminder = await use_case.unsnooze(reminder_id, now)
    return _entity_to_response(reminder, engine, now)
