"""
Tests for typed domain errors.

Verifies that each error class exists, inherits correctly,
and carries the right attributes for downstream handling.
"""


class TestDomainErrorHierarchy:
    """All domain errors inherit from a common base."""

    def test_base_error_carries_message(self):
        from patty_reminders.domain.errors import DomainError

        err = DomainError("something broke")
        assert str(err) == "something broke"

    def test_all_errors_are_domain_errors(self):
        from patty_reminders.domain import errors

        for cls in (
            errors.UnknownChannelError,
            errors.EngageTimeNotEditableError,
            errors.InvalidTimeError,
            errors.InvalidWaterSlotError,
            errors.EngineNotLoadedError,
            errors.SettingsWriteError,
            errors.GatewayUnavailableError,
        ):
            assert issubclass(cls, errors.DomainError)


class TestCatalogErrors:
    def test_unknown_channel(self):
        from patty_reminders.domain.errors import UnknownChannelError

        err = UnknownChannelError("water_noon")
        assert err.key == "water_noon"
        assert "water_noon" in str(err)

    def test_engage_time_not_editable(self):
        from patty_reminders.domain.errors import EngageTimeNotEditableError

        err = EngageTimeNotEditableError("morning_boost", "weigh_in")
        assert err.key == "morning_boost"
        assert err.adapts_to == "weigh_in"
        assert "weigh_in" in str(err)

    def test_invalid_water_slot(self):
        from patty_reminders.domain.errors import InvalidWaterSlotError

        err = InvalidWaterSlotError(9)
        assert err.index == 9
        assert "9" in str(err)

    def test_invalid_time_keeps_value(self):
        from patty_reminders.domain.errors import InvalidTimeError

        err = InvalidTimeError("25:00")
        assert err.value == "25:00"
        assert "25:00" in str(err)


class TestOperationalErrors:
    def test_settings_write_error_includes_reason(self):
        from patty_reminders.domain.errors import SettingsWriteError

        err = SettingsWriteError("notif_water_count", "database is locked")
        assert err.key == "notif_water_count"
        assert "database is locked" in str(err)

    def test_settings_write_error_without_reason(self):
        from patty_reminders.domain.errors import SettingsWriteError

        assert str(SettingsWriteError("k")) == "Failed to persist setting k"
