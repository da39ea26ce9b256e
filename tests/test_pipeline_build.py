"""Tests for building pipelines: batch, per-entry, and staged forms."""

import pytest

from condpipe import NullArgumentError, Pipeline, SequencingError, apply, apply_if
from tests.conftest import always, halve, is_even, never, over_hundred, plus, times_two


class TestOf:
    def test_binds_value(self) -> None:
        pipeline = Pipeline.of(4)
        assert pipeline.value == 4
        assert pipeline.entries == ()

    def test_binds_none(self) -> None:
        assert Pipeline.of(None).value is None

    def test_empty(self) -> None:
        empty = Pipeline.empty()
        assert empty.value is None
        assert empty.entries == ()
        assert empty.pending is None


class TestFirstMatching:
    def test_appends_in_argument_order(self) -> None:
        first = apply_if(is_even, times_two)
        second = apply_if(over_hundred, halve)
        pipeline = Pipeline.of(4).first_matching(first, second)
        assert pipeline.entries == (first, second)

    def test_appends_after_existing(self) -> None:
        first = apply_if(is_even, times_two)
        second = apply_if(over_hundred, halve)
        pipeline = Pipeline.of(4).first_matching(first).first_matching(second)
        assert pipeline.entries == (first, second)

    def test_no_entries(self) -> None:
        assert Pipeline.of(4).first_matching().entries == ()

    def test_none_entry(self) -> None:
        with pytest.raises(NullArgumentError):
            Pipeline.of(4).first_matching(None)  # type: ignore[arg-type]

    def test_non_entry_rejected_at_build(self) -> None:
        with pytest.raises(TypeError, match="expects Entry values, got tuple"):
            Pipeline.of(2).first_matching((always, str))  # type: ignore[arg-type]

    def test_non_entry_after_valid_ones(self) -> None:
        valid = apply_if(is_even, times_two)
        with pytest.raises(TypeError, match="got function"):
            Pipeline.of(2).first_matching(valid, times_two)  # type: ignore[arg-type]

    def test_receiver_unchanged(self) -> None:
        base = Pipeline.of(4)
        base.first_matching(apply_if(is_even, times_two))
        assert base.entries == ()


class TestMapWhen:
    def test_chains_entries(self) -> None:
        pipeline = Pipeline.of(4).map_when(times_two, is_even).or_map_when(halve, over_hundred)
        assert [e.action for e in pipeline.entries] == [times_two, halve]
        assert [e.condition for e in pipeline.entries] == [is_even, over_hundred]

    def test_or_map_when_first_is_rejected(self) -> None:
        with pytest.raises(SequencingError, match="start with map_when"):
            Pipeline.of(1).or_map_when(times_two, always)

    def test_none_condition(self) -> None:
        with pytest.raises(NullArgumentError):
            Pipeline.of(1).map_when(times_two, None)  # type: ignore[arg-type]

    def test_none_action_in_alternative(self) -> None:
        with pytest.raises(NullArgumentError):
            base = Pipeline.of(1).map_when(times_two, always)
            base.or_map_when(None, never)  # type: ignore[arg-type]

    def test_fails_at_call_not_at_resolution(self) -> None:
        """Nothing terminal is needed to surface the error."""
        with pytest.raises(NullArgumentError):
            Pipeline.of(1).map_when(None, None)  # type: ignore[arg-type]


class TestStagedBuilder:
    def test_apply_when_pairs(self) -> None:
        pipeline = Pipeline.of(4).apply(times_two).when(is_even)
        assert pipeline.pending is None
        assert len(pipeline.entries) == 1
        assert pipeline.entries[0].condition is is_even
        assert pipeline.entries[0].action is times_two

    def test_or_apply_appends_in_call_order(self) -> None:
        pipeline = (
            Pipeline.of(4)
            .apply(times_two)
            .when(is_even)
            .or_apply(halve)
            .when(over_hundred)
            .or_apply(plus(1))
            .when(always)
        )
        assert [e.condition for e in pipeline.entries] == [is_even, over_hundred, always]

    def test_apply_stages_without_entry(self) -> None:
        staged = Pipeline.of(4).apply(times_two)
        assert staged.pending is times_two
        assert staged.entries == ()

    def test_when_before_apply(self) -> None:
        with pytest.raises(SequencingError, match=r"pending action.*apply\(\)"):
            Pipeline.of(4).when(is_even)

    def test_when_twice(self) -> None:
        with pytest.raises(SequencingError, match="pending action"):
            Pipeline.of(4).apply(times_two).when(is_even).when(always)

    def test_apply_twice(self) -> None:
        with pytest.raises(SequencingError, match="still pending"):
            Pipeline.of(4).apply(times_two).or_apply(halve)

    def test_none_action(self) -> None:
        with pytest.raises(NullArgumentError):
            Pipeline.of(4).apply(None)  # type: ignore[arg-type]

    def test_none_condition(self) -> None:
        with pytest.raises(NullArgumentError):
            Pipeline.of(4).apply(times_two).when(None)  # type: ignore[arg-type]

    def test_pending_action_blocks_resolution(self) -> None:
        staged = Pipeline.of(4).apply(times_two).when(is_even).or_apply(halve)
        with pytest.raises(SequencingError, match="call when"):
            staged.or_else(0)

    def test_pending_action_blocks_map_when(self) -> None:
        with pytest.raises(SequencingError):
            Pipeline.of(4).apply(times_two).map_when(halve, always)

    def test_pending_action_blocks_transformation(self) -> None:
        staged = Pipeline.of(4).apply(times_two)
        with pytest.raises(SequencingError):
            staged.map(str)
        with pytest.raises(SequencingError):
            staged.flat_map(Pipeline.of)


class TestUnboundRules:
    def test_module_apply_starts_unbound(self) -> None:
        rules = apply(times_two).when(is_even)
        assert rules.value is None
        assert len(rules.entries) == 1

    def test_apply_to_rebinds(self) -> None:
        rules = apply(times_two).when(is_even).or_apply(halve).when(over_hundred)
        assert rules.apply_to(4).or_else(0) == 8
        assert rules.apply_to(101).or_else(0) == 50.5
        assert rules.apply_to(3).or_else(0) == 0

    def test_apply_to_leaves_rules_unbound(self) -> None:
        rules = apply(times_two).when(is_even)
        rules.apply_to(4)
        assert rules.value is None
        assert rules.or_else(-1) == -1
