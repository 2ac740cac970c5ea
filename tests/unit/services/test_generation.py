"""Tests for generating reminders from source entity dates."""

from datetime import timedelta

import pytest

from homehub.core.entities import ReminderDomain, ReminderPriority, SourceEntity
from homehub.core.services import auto_generate_key
from homehub.core.services.reminder_lifecycle import complete


class TestGenerate:
    """Tests for ReminderEngine.generate."""

    def test_single_field_in_window(self, engine, now, today, vehicle):
        reminders = engine.generate([vehicle], now, lookahead_days=30)

        assert len(reminders) == 1
        reminder = reminders[0]
        assert reminder.auto_generate_key == "vehicle:7:mot_expiry"
        assert reminder.title == "Golf MOT expires"
        assert reminder.reminder_date == today + timedelta(days=10)
        assert reminder.domain == ReminderDomain.HOUSEHOLD
        assert reminder.priority == ReminderPriority.HIGH
        assert reminder.is_auto_generated is True
        assert reminder.entity_type == "vehicle"
        assert reminder.entity_id == 7
        assert reminder.entity_name == "Golf"

    def test_second_run_creates_nothing(self, engine, now, vehicle):
        first = engine.generate([vehicle], now, lookahead_days=30)
        second = engine.generate([vehicle], now, lookahead_days=30, existing=first)

        assert len(second) == 1
        assert second[0] is first[0]

    def test_longer_lookahead_picks_up_more_fields(self, engine, now, vehicle):
        reminders = engine.generate([vehicle], now, lookahead_days=60)
        keys = sorted(r.auto_generate_key for r in reminders)
        assert keys == ["vehicle:7:mot_expiry", "vehicle:7:tax_expiry"]

    def test_past_dates_included(self, engine, now, today):
        source = SourceEntity(
            id=1, entity_type="document", name="Passport",
            dates={"expiry_date": today - timedelta(days=3)},
        )
        reminders = engine.generate([source], now)

        assert len(reminders) == 1
        assert reminders[0].priority == ReminderPriority.URGENT

    def test_mapping_sources(self, engine, now):
        source = {
            "id": 4,
            "entity_type": "subscription",
            "name": "Streaming",
            "dates": {"next_billing_date": "2024-03-20", "trial_end_date": None},
        }
        reminders = engine.generate([source], now)

        assert [r.auto_generate_key for r in reminders] == ["subscription:4:next_billing_date"]
        assert reminders[0].domain == ReminderDomain.FINANCE
        assert reminders[0].description == "Renews on 20 Mar 2024"

    def test_existing_not_mutated(self, engine, now, vehicle, make_reminder):
        manual = make_reminder(3)
        existing = [manual]
        result = engine.generate([vehicle], now, existing=existing)

        assert existing == [manual]
        assert len(result) == 2
        assert result[0] is manual


class TestPlanGeneration:
    """Tests for ReminderEngine.plan_generation."""

    def test_counts(self, engine, now, vehicle):
        plan = engine.plan_generation([vehicle], now, lookahead_days=30)

        assert len(plan.to_create) == 1
        assert plan.missing_date == 2
        assert plan.out_of_window == 1
        assert plan.changes == 1

    def test_unchanged_on_rerun(self, engine, now, vehicle):
        existing = engine.generate([vehicle], now)
        plan = engine.plan_generation([vehicle], now, existing=existing)

        assert plan.to_create == []
        assert plan.to_update == []
        assert len(plan.unchanged) == 1

    def test_moved_date_updates_in_place(self, engine, now, today, vehicle, make_reminder):
        existing = [
            make_reminder(
                10,
                id=55,
                title="Golf MOT expires",
                auto_generate_key="vehicle:7:mot_expiry",
                is_auto_generated=True,
            )
        ]
        vehicle.dates["mot_expiry"] = today + timedelta(days=20)

        plan = engine.plan_generation([vehicle], now, existing=existing)

        assert plan.to_create == []
        assert len(plan.to_update) == 1
        updated = plan.to_update[0]
        assert updated.id == 55
        assert updated.reminder_date == today + timedelta(days=20)
        assert updated.priority == ReminderPriority.MEDIUM
        assert existing[0].reminder_date == today + timedelta(days=10)

    def test_renamed_source_updates_title(self, engine, now, vehicle):
        existing = engine.generate([vehicle], now)
        vehicle.name = "Polo"

        plan = engine.plan_generation([vehicle], now, existing=existing)

        assert plan.to_update[0].title == "Polo MOT expires"
        assert plan.to_update[0].entity_name == "Polo"

    def test_resolved_same_date_is_suppressed(self, engine, now, vehicle):
        existing = [complete(r, now) for r in engine.generate([vehicle], now)]

        plan = engine.plan_generation([vehicle], now, existing=existing)

        assert plan.to_create == []
        assert plan.already_resolved == 1

    def test_resolved_then_date_renewed_creates_new(self, engine, now, today, vehicle):
        existing = [complete(r, now) for r in engine.generate([vehicle], now)]
        vehicle.dates["mot_expiry"] = today + timedelta(days=25)

        plan = engine.plan_generation([vehicle], now, existing=existing)

        assert len(plan.to_create) == 1
        assert plan.to_create[0].reminder_date == today + timedelta(days=25)

    def test_domain_filter(self, engine, now, today, vehicle):
        subscription = SourceEntity(
            id=2, entity_type="subscription", name="Gym",
            dates={"next_billing_date": today + timedelta(days=5)},
        )
        plan = engine.plan_generation([vehicle, subscription], now, domains=["finance"])

        assert [r.auto_generate_key for r in plan.to_create] == ["subscription:2:next_billing_date"]
        assert plan.filtered_out == 1

    def test_unknown_domain_filter_rejected(self, engine, now, vehicle):
        with pytest.raises(ValueError):
            engine.plan_generation([vehicle], now, domains=["gardening"])

    def test_source_without_id_skipped(self, engine, now, today):
        source = SourceEntity(entity_type="document", name="Draft", dates={"expiry_date": today})
        assert engine.plan_generation([source], now).to_create == []

    def test_duplicate_sources_keep_last(self, engine, now, today):
        first = SourceEntity(id=3, entity_type="document", name="Old", dates={"expiry_date": today})
        second = SourceEntity(id=3, entity_type="document", name="New", dates={"expiry_date": today})

        plan = engine.plan_generation([first, second], now)

        assert len(plan.to_create) == 1
        assert plan.to_create[0].entity_name == "New"

    def test_key_format(self, vehicle):
        from homehub.core.entities.source_entity import EXPIRY_FIELDS, SourceEntityType

        field = EXPIRY_FIELDS[SourceEntityType.VEHICLE][1]
        assert auto_generate_key(vehicle, field) == "vehicle:7:tax_expiry"
