"""
Generate Reminders Use Case.

Scans source entities for upcoming expiry and renewal dates and stores
one reminder per dated field, refreshing reminders generated earlier.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from homehub.config import get_logger
from homehub.core.entities.reminder import ReminderDomain
from homehub.core.interfaces.storage import IReminderStore, ISourceEntityStore
from homehub.core.services.reminder_engine import ReminderEngine

logger = get_logger(__name__)


@dataclass
class GenerationResult:
    """Result of a generation run."""

    sources_scanned: int = 0
    reminders_created: int = 0
    reminders_updated: int = 0
    unchanged: int = 0
    already_resolved: int = 0
    missing_date: int = 0
    out_of_window: int = 0
    created_reminder_ids: list[int | str] = field(default_factory=list)
    updated_reminder_ids: list[int | str] = field(default_factory=list)


class GenerateRemindersUseCase:
    """
    Use case for generating reminders from source entity dates.

    Running it twice without changes to the sources creates nothing the
    second time.
    """

    def __init__(
        self,
        source_store: ISourceEntityStore | None = None,
        reminder_store: IReminderStore | None = None,
        engine: ReminderEngine | None = None,
    ):
        self._source_store = source_store
        self._rem_store = reminder_store
        self._engine = engine

    async def _get_source_store(self) -> ISourceEntityStore:
        if self._source_store is None:
            from homehub.infrastructure.storage.sqlite import get_source_entity_store
            self._source_store = await get_source_entity_store()
        return self._source_store

    async def _get_rem_store(self) -> IReminderStore:
        if self._rem_store is None:
            from homehub.infrastructure.storage.sqlite import get_reminder_store
            self._rem_store = await get_reminder_store()
        return self._rem_store

    def _get_engine(self) -> ReminderEngine:
        if self._engine is None:
            from homehub.application.services import get_reminder_engine
            self._engine = get_reminder_engine()
        return self._engine

    async def execute(
        self,
        now: datetime,
        lookahead_days: int | None = None,
        domains: Iterable[ReminderDomain] | None = None,
    ) -> GenerationResult:
        """
        Generate reminders due within the lookahead window.

        Args:
            now: Current time; its date is "today".
            lookahead_days: Days ahead to scan (engine default when None).
            domains: Restrict generation to these domains.

        Returns:
            GenerationResult with counts and affected reminder IDs.
        """
        source_store = await self._get_source_store()
        rem_store = await self._get_rem_store()
        engine = self._get_engine()

        sources = await source_store.list_entities(limit=None)
        existing = await rem_store.list_auto_generated()
        plan = engine.plan_generation(
            sources,
            now,
            lookahead_days=lookahead_days,
            existing=existing,
            domains=list(domains) if domains else None,
        )

        result = GenerationResult(
            sources_scanned=len(sources),
            unchanged=len(plan.unchanged),
            already_resolved=plan.already_resolved,
            missing_date=plan.missing_date,
            out_of_window=plan.out_of_window,
        )

        for reminder in plan.to_update:
            updated = await rem_store.update(reminder)
            result.reminders_updated += 1
            if updated.id is not None:
                result.updated_reminder_ids.append(updated.id)

        for reminder in plan.to_create:
            created = await rem_store.create(reminder)
            result.reminders_created += 1
            if created.id is not None:
                result.created_reminder_ids.append(created.id)

        logger.info(
            "reminder_generation_complete",
            sources=result.sources_scanned,
            created=result.reminders_created,
            updated=result.reminders_updated,
            unchanged=result.unchanged,
            already_resolved=result.already_resolved,
        )
        return result
