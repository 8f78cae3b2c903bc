"""Tests for ConfigurableUnit."""

import asyncio
import io

import pytest
from rich.console import Console

from configunit import ConfigurableUnit
from configunit.adapters.io.output import ConsoleOutputAdapter
from configunit.config import InvalidConfigurationError, UnitOptions


class TestConstruction:
    """Test default filling and option merging."""

    def test_defaults_fill_empty_options(self):
        """Test that an empty mapping yields every default."""
        unit = ConfigurableUnit.create({})

        assert unit.param1 == "hello"
        assert unit.param2 == 0
        assert unit.param3 == 100
        assert unit.param2_squared == 0

    def test_no_options_at_all(self):
        """Test that options can be omitted entirely."""
        unit = ConfigurableUnit()

        assert unit.param1 == "hello"
        assert unit.param3 == 100

    def test_overrides_merge_over_defaults(self):
        """Test that supplied options win and the rest stay default."""
        unit = ConfigurableUnit.create({"param1": "hi", "param2": 10})

        assert unit.param1 == "hi"
        assert unit.param2 == 10
        assert unit.param3 == 100
        assert unit.param2_squared == 100

    def test_none_falls_back_to_default(self):
        """Test that None is treated like an absent option."""
        unit = ConfigurableUnit.create({"param1": None, "param2": 3, "param3": None})

        assert unit.param1 == "hello"
        assert unit.param2 == 3
        assert unit.param3 == 100
        assert unit.param2_squared == 9

    def test_unknown_keys_are_ignored(self):
        """Test that keys outside the schema do not reach the unit."""
        unit = ConfigurableUnit.create({"param4": "extra", "param2": 2})

        assert unit.param2 == 2
        assert not hasattr(unit, "param4")

    def test_accepts_unit_options_model(self):
        """Test construction from an already validated model."""
        unit = ConfigurableUnit.create(UnitOptions(param1="model", param3=7))

        assert unit.param1 == "model"
        assert unit.param2 == 0
        assert unit.param3 == 7

    def test_float_param2(self):
        """Test that the derived square works for floats."""
        unit = ConfigurableUnit.create({"param2": 1.5})

        assert unit.param2_squared == pytest.approx(2.25)

    def test_negative_param2_squares_positive(self):
        """Test the derived square of a negative value."""
        assert ConfigurableUnit.create({"param2": -4}).param2_squared == 16

    @pytest.mark.parametrize(
        "options",
        [
            {"param2": "ten"},
            {"param3": [1, 2]},
            {"param1": {"nested": True}},
            {"param2": True},
        ],
    )
    def test_mistyped_options_rejected(self, options):
        """Test that wrong types are rejected at construction."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            ConfigurableUnit.create(options)
        assert "Invalid unit options" in str(exc_info.value)

    def test_caller_mapping_is_not_mutated(self):
        """Test that construction leaves the caller's options untouched."""
        options = {"param2": 5}
        ConfigurableUnit.create(options)

        assert options == {"param2": 5}


class TestInstanceState:
    """Test per-instance state and the derived field."""

    def test_instances_are_isolated(self):
        """Test that mutating one instance never affects another."""
        a = ConfigurableUnit.create({"param2": 10})
        b = ConfigurableUnit.create({"param2": 10})

        a.increment(10)

        assert a.param2 == 20
        assert b.param2 == 10

    def test_defaults_not_shared_after_mutation(self):
        """Test that a later instance still sees pristine defaults."""
        first = ConfigurableUnit.create({"param1": "changed"})
        first.increment(3)

        second = ConfigurableUnit.create({})
        assert second.param1 == "hello"
        assert second.param2 == 0

    def test_increment_leaves_square_stale(self):
        """Test that param2_squared is not recomputed after increment."""
        unit = ConfigurableUnit.create({"param2": 10})

        unit.increment(5)

        assert unit.param2 == 15
        assert unit.param2_squared == 100

    @pytest.mark.parametrize("amount,expected", [(0, 10), (-15, -5), (2.5, 12.5)])
    def test_increment_accepts_any_amount(self, amount, expected):
        """Test zero, negative and fractional increments."""
        unit = ConfigurableUnit.create({"param2": 10})

        unit.increment(amount)

        assert unit.param2 == expected

    def test_options_snapshot_reflects_current_values(self):
        """Test that the options property tracks increments."""
        unit = ConfigurableUnit.create({"param1": "x", "param2": 1})
        unit.increment(1)

        snapshot = unit.options
        assert snapshot.model_dump() == {"param1": "x", "param2": 2, "param3": 100}

    def test_repr(self):
        """Test the debug representation."""
        unit = ConfigurableUnit.create({"param2": 3})
        assert repr(unit) == (
            "ConfigurableUnit(param1='hello', param2=3, param3=100, param2_squared=9)"
        )


class TestMethods:
    """Test read, log and alias methods."""

    def test_read_primary(self):
        """Test that read_primary returns param1 unchanged."""
        assert ConfigurableUnit.create({"param1": "x"}).read_primary() == "x"

    def test_log_primary_writes_one_line(self, memory_output):
        """Test that log_primary emits the raw value once."""
        unit = ConfigurableUnit.create({"param1": "shout"}, output=memory_output)

        result = unit.log_primary()

        assert result is None
        assert memory_output.lines == ["shout"]

    def test_default_output_is_console(self):
        """Test that a unit writes to the console when no sink is given."""
        unit = ConfigurableUnit.create({})
        assert isinstance(unit.output, ConsoleOutputAdapter)

    def test_log_primary_to_console_is_undecorated(self):
        """Test that console output contains no markup processing."""
        buffer = io.StringIO()
        console = Console(file=buffer, width=120)
        unit = ConfigurableUnit.create(
            {"param1": "[bold]raw[/bold]"}, output=ConsoleOutputAdapter(console)
        )

        unit.log_primary()

        assert buffer.getvalue() == "[bold]raw[/bold]\n"

    def test_template_aliases(self, memory_output):
        """Test the template-style method names map to the same behaviour."""
        unit = ConfigurableUnit.create({"param2": 1}, output=memory_output)

        unit.add_something(4)
        unit.method_name()

        assert unit.param2 == 5
        assert unit.get_something() == "hello"
        assert memory_output.lines == ["hello"]


class TestDeferredFetch:
    """Test the asynchronous fetch."""

    @pytest.mark.asyncio
    async def test_fetch_deferred_resolves_to_one(self):
        """Test that the awaited value is 1."""
        unit = ConfigurableUnit.create({})

        assert await unit.fetch_deferred() == 1

    @pytest.mark.asyncio
    async def test_fetch_some_data_alias(self):
        """Test the template-style async method name."""
        assert await ConfigurableUnit.create({}).fetch_some_data() == 1

    def test_fetch_deferred_returns_awaitable(self):
        """Test that calling fetch_deferred does not produce the value inline."""
        unit = ConfigurableUnit.create({})

        pending = unit.fetch_deferred()
        try:
            assert asyncio.iscoroutine(pending)
            assert pending != 1
        finally:
            pending.close()

    @pytest.mark.asyncio
    async def test_start_fetch_completes_after_current_turn(self):
        """Test that the scheduled task is pending until the caller yields."""
        unit = ConfigurableUnit.create({})

        task = unit.start_fetch()

        assert isinstance(task, asyncio.Task)
        assert not task.done()
        assert await task == 1
        assert task.exception() is None

    def test_start_fetch_requires_running_loop(self):
        """Test that scheduling outside an event loop fails loudly."""
        unit = ConfigurableUnit.create({})

        with pytest.raises(RuntimeError):
            unit.start_fetch()

    @pytest.mark.asyncio
    async def test_concurrent_fetches_on_independent_units(self):
        """Test that many units can fetch at once."""
        units = [ConfigurableUnit.create({"param2": i}) for i in range(5)]

        results = await asyncio.gather(*(u.fetch_deferred() for u in units))

        assert results == [1] * 5
        assert [u.param2 for u in units] == list(range(5))
