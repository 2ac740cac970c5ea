"""
Reminder engine.

Pure computations over reminders: status classification, summary counts,
next occurrences and generation of reminders from source entity dates.
Nothing here touches storage, and inputs are never mutated.
"""

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any

from pydantic import ValidationError

from homehub.config import get_logger
from homehub.core.dates import date_only, days_between, parse_date, utcnow
from homehub.core.entities.reminder import (
    Reminder,
    ReminderDomain,
    ReminderPriority,
    ReminderStatus,
)
from homehub.core.entities.source_entity import (
    ExpiryField,
    SourceEntity,
    expiry_fields_for,
)
from homehub.core.entities.summary import (
    DomainCount,
    PriorityCount,
    ReminderSummary,
    SkippedReminder,
)
from homehub.core.exceptions import DuplicateGenerationError, InvalidDateError
from homehub.core.services.recurrence import first_on_or_after

logger = get_logger(__name__)

DEFAULT_WINDOW_DAYS = 7
DEFAULT_LOOKAHEAD_DAYS = 30

_KNOWN_DOMAINS = {d.value for d in ReminderDomain}

ReminderInput = Reminder | Mapping[str, Any]
SourceInput = SourceEntity | Mapping[str, Any]


def auto_generate_key(source: SourceEntity, expiry_field: ExpiryField) -> str:
    """Identity of a generated reminder: one per (entity, date field)."""
    return f"{source.entity_type.value}:{source.id}:{expiry_field.name}"


def priority_for(days_until: int) -> ReminderPriority:
    """Urgency of a generated reminder from the days left until it is due."""
    if days_until <= 7:
        return ReminderPriority.URGENT
    if days_until <= 14:
        return ReminderPriority.HIGH
    if days_until <= 30:
        return ReminderPriority.MEDIUM
    return ReminderPriority.LOW


@dataclass
class GenerationPlan:
    """What a generation pass would do against an existing reminder set."""

    to_create: list[Reminder] = field(default_factory=list)
    to_update: list[Reminder] = field(default_factory=list)
    unchanged: list[Reminder] = field(default_factory=list)
    already_resolved: int = 0
    missing_date: int = 0
    out_of_window: int = 0
    filtered_out: int = 0

    @property
    def changes(self) -> int:
        return len(self.to_create) + len(self.to_update)


class ReminderEngine:
    """
    Status, summary and generation rules for reminders.

    Callers always pass ``now``; the engine never reads the clock for
    anything that affects a result.
    """

    def __init__(
        self,
        window_days: int = DEFAULT_WINDOW_DAYS,
        lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS,
    ) -> None:
        self.window_days = window_days
        self.lookahead_days = lookahead_days

    @staticmethod
    def coerce(record: ReminderInput) -> Reminder:
        """
        Turn a reminder-like mapping into a Reminder.

        Domains from other or older hub versions are read as ``custom``.

        Raises:
            InvalidDateError: If the mapping's reminder_date cannot be parsed.
            ValidationError: If any other field is unusable.
        """
        if isinstance(record, Reminder):
            return record
        # the model splits off the time of day itself
        parse_date(record.get("reminder_date"), reminder_id=record.get("id"))
        data = dict(record)
        domain = data.get("domain")
        if domain is not None and (not isinstance(domain, str) or domain not in _KNOWN_DOMAINS):
            logger.warning("reminder_unknown_domain", reminder_id=data.get("id"), domain=domain)
            data["domain"] = ReminderDomain.CUSTOM
        return Reminder.model_validate(data)

    @staticmethod
    def skipped_record(
        record: ReminderInput, error: InvalidDateError | ValidationError
    ) -> SkippedReminder:
        """Describe a record that could not be read as a reminder."""
        if isinstance(error, InvalidDateError):
            return SkippedReminder(reminder_id=error.reminder_id, value=error.value, reason=error.message)

        first = error.errors()[0]
        field_name = ".".join(str(part) for part in first["loc"]) or "record"
        reminder_id = record.get("id") if isinstance(record, Mapping) else None
        return SkippedReminder(
            reminder_id=reminder_id,
            value=first.get("input"),
            reason=f"Invalid {field_name}: {first['msg']}",
        )

    @staticmethod
    def days_until(reminder: ReminderInput, now: date | datetime) -> int:
        """Calendar days from today to the reminder date; negative when past."""
        reminder = ReminderEngine.coerce(reminder)
        return days_between(now, reminder.reminder_date)

    def classify(self, reminder: ReminderInput, now: date | datetime) -> ReminderStatus:
        """
        Display status of a reminder on the day of ``now``.

        A reminder carrying both flags is reported as completed.
        """
        reminder = self.coerce(reminder)
        if reminder.is_completed:
            return ReminderStatus.COMPLETED
        if reminder.is_dismissed:
            return ReminderStatus.DISMISSED

        days = self.days_until(reminder, now)
        if days < 0:
            return ReminderStatus.OVERDUE
        if days == 0:
            return ReminderStatus.DUE_TODAY
        return ReminderStatus.UPCOMING

    def is_overdue(self, reminder: ReminderInput, now: date | datetime) -> bool:
        return self.classify(reminder, now) == ReminderStatus.OVERDUE

    def next_occurrence(self, reminder: ReminderInput, now: date | datetime) -> date | None:
        """
        Next date the reminder falls due, on or after today.

        Resolved reminders and past one-off reminders have none.
        """
        reminder = self.coerce(reminder)
        if reminder.is_resolved:
            return None
        return first_on_or_after(reminder, date_only(now))

    def summarize(
        self,
        reminders: Iterable[ReminderInput],
        now: date | datetime,
        window_days: int | None = None,
    ) -> ReminderSummary:
        """
        Count active reminders by status bucket, domain and priority.

        Records that cannot be read are logged and listed in ``skipped``;
        they do not stop the summary.
        """
        window = self.window_days if window_days is None else window_days
        summary = ReminderSummary(window_days=window)
        by_domain: Counter[str] = Counter()
        by_priority: Counter[ReminderPriority] = Counter()

        for record in reminders:
            try:
                reminder = self.coerce(record)
            except (InvalidDateError, ValidationError) as e:
                skipped = self.skipped_record(record, e)
                logger.warning(
                    "reminder_skipped",
                    reminder_id=skipped.reminder_id,
                    reason=skipped.reason,
                )
                summary.skipped.append(skipped)
                continue

            status = self.classify(reminder, now)
            if status.is_resolved:
                continue

            days = self.days_until(reminder, now)
            summary.total += 1
            if status == ReminderStatus.OVERDUE:
                summary.overdue += 1
            elif status == ReminderStatus.DUE_TODAY:
                summary.upcoming_today += 1
            if 0 <= days <= window:
                summary.upcoming_week += 1

            by_domain[reminder.domain.value] += 1
            by_priority[reminder.priority] += 1

        summary.by_domain = [
            DomainCount(domain=domain, count=count) for domain, count in sorted(by_domain.items())
        ]
        summary.by_priority = [
            PriorityCount(priority=priority.value, count=by_priority[priority])
            for priority in sorted(by_priority, key=lambda p: p.rank, reverse=True)
        ]
        return summary

    def plan_generation(
        self,
        sources: Iterable[SourceInput],
        now: date | datetime,
        lookahead_days: int | None = None,
        existing: Iterable[Reminder] = (),
        domains: Iterable[ReminderDomain | str] | None = None,
    ) -> GenerationPlan:
        """
        Work out which generated reminders to create or refresh.

        Every dated field due on or before today + lookahead yields one
        candidate keyed by (entity type, entity id, field). Dates already
        past are included. Against ``existing``:

        - an unresolved reminder with the same key is refreshed in place
        - a resolved reminder with the same key and date suppresses the candidate
        - otherwise a new reminder is created
        """
        lookahead = self.lookahead_days if lookahead_days is None else lookahead_days
        today = date_only(now)
        horizon = today + timedelta(days=lookahead)
        wanted = {ReminderDomain(d) for d in domains} if domains else None
        plan = GenerationPlan()

        active_by_key: dict[str, Reminder] = {}
        resolved_dates: dict[str, set[date]] = {}
        for reminder in existing:
            key = reminder.auto_generate_key
            if not key:
                continue
            if reminder.is_resolved:
                resolved_dates.setdefault(key, set()).add(reminder.reminder_date)
            else:
                active_by_key.setdefault(key, reminder)

        candidates: dict[str, Reminder] = {}
        for record in sources:
            source = record if isinstance(record, SourceEntity) else SourceEntity.model_validate(record)
            if source.id is None:
                logger.warning("reminder_generation_source_without_id", name=source.name)
                continue

            for expiry_field in expiry_fields_for(source.entity_type):
                due = source.date_for(expiry_field.name)
                if due is None:
                    plan.missing_date += 1
                    continue
                if due > horizon:
                    plan.out_of_window += 1
                    continue
                if wanted is not None and expiry_field.domain not in wanted:
                    plan.filtered_out += 1
                    continue

                key = auto_generate_key(source, expiry_field)
                candidate = self._candidate(source, expiry_field, key, due, today)
                try:
                    self._register(candidates, key, candidate)
                except DuplicateGenerationError:
                    logger.warning("reminder_generation_duplicate_key", key=key)
                    candidates[key] = candidate

        for key, candidate in candidates.items():
            current = active_by_key.get(key)
            if current is not None:
                refreshed = self._refresh(current, candidate)
                if refreshed is current:
                    plan.unchanged.append(current)
                else:
                    plan.to_update.append(refreshed)
            elif candidate.reminder_date in resolved_dates.get(key, set()):
                plan.already_resolved += 1
            else:
                plan.to_create.append(candidate)

        logger.debug(
            "reminder_generation_planned",
            create=len(plan.to_create),
            update=len(plan.to_update),
            unchanged=len(plan.unchanged),
            already_resolved=plan.already_resolved,
        )
        return plan

    def generate(
        self,
        sources: Iterable[SourceInput],
        now: date | datetime,
        lookahead_days: int | None = None,
        existing: Iterable[Reminder] = (),
        domains: Iterable[ReminderDomain | str] | None = None,
    ) -> list[Reminder]:
        """
        Apply a generation plan to ``existing`` and return the resulting set.

        Calling this again with the returned set and the same inputs yields
        a set of the same size.
        """
        existing = list(existing)
        plan = self.plan_generation(sources, now, lookahead_days, existing, domains)
        replacements = {r.auto_generate_key: r for r in plan.to_update}

        result: list[Reminder] = []
        for reminder in existing:
            key = reminder.auto_generate_key
            if key in replacements and not reminder.is_resolved:
                result.append(replacements.pop(key))
            else:
                result.append(reminder)
        result.extend(plan.to_create)
        return result

    @staticmethod
    def _register(candidates: dict[str, Reminder], key: str, candidate: Reminder) -> None:
        if key in candidates:
            raise DuplicateGenerationError(key)
        candidates[key] = candidate

    @staticmethod
    def _candidate(
        source: SourceEntity,
        expiry_field: ExpiryField,
        key: str,
        due: date,
        today: date,
    ) -> Reminder:
        return Reminder(
            title=expiry_field.title_for(source.name),
            description=expiry_field.description_for(due),
            domain=expiry_field.domain,
            reminder_date=due,
            entity_type=source.entity_type.value,
            entity_id=source.id,
            entity_name=source.name,
            priority=priority_for((due - today).days),
            is_auto_generated=True,
            auto_generate_key=key,
        )

    @staticmethod
    def _refresh(current: Reminder, candidate: Reminder) -> Reminder:
        changes = {
            name: getattr(candidate, name)
            for name in ("title", "description", "domain", "reminder_date", "entity_name", "priority")
            if getattr(current, name) != getattr(candidate, name)
        }
        if not changes:
            return current
        changes["updated_at"] = utcnow()
        return current.model_copy(update=changes)
