# tests/test_validator.py
"""Tests for validating tables against constraint sets."""

import logging
from datetime import date

import polars as pl
import pytest

from konstrain.checks.base import BaseCheck, CheckKind
from konstrain.checks.registry import build_checks
from konstrain.constraints.constraint_set import ConstraintSet
from konstrain.engine.validator import Validator, validate
from konstrain.errors import MissingColumnError
from konstrain.types import Constraint, DataType, Validation


@pytest.fixture
def people_set(people_df) -> ConstraintSet:
    return ConstraintSet.from_table(people_df, name="people")


class TestSelfConsistency:
    """A table always validates clean against its own inferred constraints."""

    def test_clean_against_own_contract(self, people_df, people_set):
        report = validate(people_df, people_set)
        assert report.passed
        for v in report:
            assert v.data_type is True
            for count in v.counts().values():
                assert count in (0, None)

    def test_applicable_checks_are_zero_not_none(self, people_df, people_set):
        report = validate(people_df, people_set)
        name = report.get("name")
        assert name.nullable == 0
        assert name.unique == 0
        assert name.min_length == 0
        assert name.max_length == 0
        assert name.allowed_values == 0
        joined = report.get("joined")
        assert (joined.min_value, joined.max_value) == (0, 0)

    @pytest.mark.parametrize(
        "df",
        [
            pl.DataFrame({"q": ['say "hi"', "back\\slash", None]}),
            pl.DataFrame({"x": [1.0, float("nan"), None, 1.0]}),
            pl.DataFrame({"c": pl.Series(["a", "b", "a"], dtype=pl.Categorical)}),
            pl.DataFrame({"e": pl.Series([], dtype=pl.String)}),
        ],
    )
    def test_edge_tables(self, df):
        report = validate(df, ConstraintSet.from_table(df))
        assert report.passed


class TestChecks:
    """Each check against the bad_people fixture."""

    @pytest.fixture
    def report(self, bad_people_df, people_set):
        return validate(bad_people_df, people_set)

    def test_order_mirrors_constraint_set(self, report, people_set):
        assert [v.name for v in report] == people_set.names

    def test_integer_column(self, report):
        assert report.get("id") == Validation(
            name="id",
            data_type=True,
            nullable=1,
            unique=1,
            min_value=0,
            max_value=1,
        )

    def test_string_column(self, report):
        assert report.get("name") == Validation(
            name="name",
            data_type=True,
            nullable=0,
            unique=0,
            min_length=1,
            max_length=1,
            allowed_values=2,
        )

    def test_nullable_column_skips_null_check(self, report):
        age = report.get("age")
        assert age.nullable is None
        assert age.unique == 0
        assert (age.min_value, age.max_value) == (1, 1)

    def test_categorical_column(self, report):
        area = report.get("area")
        # duplicates permitted -> uniqueness not applicable
        assert area.unique is None
        assert area.allowed_values == 2
        assert area.max_length == 2
        assert area.min_length == 0

    def test_float_and_date_columns(self, report):
        assert (report.get("score").min_value, report.get("score").max_value) == (1, 1)
        assert (report.get("joined").min_value, report.get("joined").max_value) == (1, 1)

    def test_each_disallowed_occurrence_counts_once(self):
        ref = pl.DataFrame({"area": ["Urban", "Rural"]})
        cs = ConstraintSet.from_table(ref)
        target = pl.DataFrame({"area": ["Urban", "Suburban", "Rural", "Suburban", "Suburban", None]})
        assert validate(target, cs).get("area").allowed_values == 3

    def test_uniqueness_counts_duplicate_occurrences(self):
        cs = ConstraintSet("t", [Constraint(name="id", declared_type=DataType.INT, unique=True)])
        df = pl.DataFrame({"id": [1, 2, 2, 3, 3, 3, None, None]})
        assert validate(df, cs).get("id").unique == 3

    def test_max_value_compares_against_max_bound(self):
        cs = ConstraintSet(
            "t",
            [Constraint(name="x", declared_type=DataType.INT, min_value=0.0, max_value=10.0)],
        )
        df = pl.DataFrame({"x": [-5, 0, 5, 10, 11, 50]})
        v = validate(df, cs).get("x")
        assert v.min_value == 1
        assert v.max_value == 2

    def test_date_bounds(self):
        epoch = date(1970, 1, 1)
        lo = float((date(2024, 1, 1) - epoch).days)
        hi = float((date(2024, 12, 31) - epoch).days)
        cs = ConstraintSet(
            "t", [Constraint(name="d", declared_type=DataType.DATE, min_value=lo, max_value=hi)]
        )
        df = pl.DataFrame({"d": [date(2023, 12, 31), date(2024, 6, 1), date(2025, 1, 1)]})
        v = validate(df, cs).get("d")
        assert (v.min_value, v.max_value) == (1, 1)


class TestNotApplicable:
    def test_unset_bounds_are_none(self):
        cs = ConstraintSet("t", [Constraint(name="x", declared_type=DataType.INT, nullable=True)])
        v = validate(pl.DataFrame({"x": [1, None]}), cs).get("x")
        assert v == Validation(name="x", data_type=True)

    def test_missing_column_makes_every_check_none(self, people_df, caplog):
        cs = ConstraintSet(
            "t",
            [
                Constraint(name="id", declared_type=DataType.INT, unique=True),
                Constraint(
                    name="ghost",
                    declared_type=DataType.STRING,
                    min_length=1,
                    max_length=3,
                    allowed_values=("a",),
                ),
            ],
        )
        with caplog.at_level(logging.WARNING, logger="konstrain"):
            report = validate(people_df, cs)

        ghost = report.get("ghost")
        assert ghost == Validation(name="ghost")
        assert ghost.column_missing is True
        assert all(value is None for value in ghost.counts().values())
        assert report.missing_columns == ["ghost"]
        assert report.get("id").unique == 0
        assert "ghost" in caplog.text

    def test_validate_column_raises_for_missing_column(self, people_df):
        with pytest.raises(MissingColumnError, match="ghost"):
            Validator().validate_column(people_df, Constraint(name="ghost"))

    def test_length_checks_skip_non_string_column(self):
        cs = ConstraintSet(
            "t", [Constraint(name="x", declared_type=DataType.STRING, min_length=1, max_length=2)]
        )
        v = validate(pl.DataFrame({"x": [100, 2000]}), cs).get("x")
        assert v.data_type is False
        assert v.min_length is None
        assert v.max_length is None

    def test_value_checks_skip_string_column(self):
        cs = ConstraintSet(
            "t", [Constraint(name="x", declared_type=DataType.INT, min_value=0.0, max_value=1.0)]
        )
        v = validate(pl.DataFrame({"x": ["a", "b"]}), cs).get("x")
        assert v.data_type is False
        assert (v.min_value, v.max_value) == (None, None)

    def test_allowed_values_on_numeric_column_compares_text(self):
        cs = ConstraintSet(
            "t",
            [Constraint(name="x", declared_type=DataType.STRING, allowed_values=("1", "2"))],
        )
        v = validate(pl.DataFrame({"x": [1, 2, 3]}), cs).get("x")
        assert v.allowed_values == 1


class TestIsolation:
    def test_edit_effect_on_nullable(self, people_df):
        """Allowing nulls moves the null check from a count to not applicable."""
        cs = ConstraintSet.from_table(people_df.drop_nulls(), name="people")
        assert cs.get("age").nullable is False
        assert validate(people_df, cs).get("age").nullable == 2

        cs.modify("age", "nullable", "true")
        assert validate(people_df, cs).get("age").nullable is None

    def test_failing_check_does_not_affect_others(self, people_df, people_set, caplog):
        class ExplodingCheck(BaseCheck):
            kind = CheckKind.MIN_LENGTH

            def evaluate(self, series, constraint):
                raise RuntimeError("boom")

        checks = [c for c in build_checks() if c.kind is not CheckKind.MIN_LENGTH]
        checks.append(ExplodingCheck())

        with caplog.at_level(logging.WARNING, logger="konstrain"):
            report = Validator(checks=checks).validate(people_df, people_set)

        name = report.get("name")
        assert name.min_length is None
        assert name.max_length == 0
        assert report.get("age").min_value == 0
        assert "boom" in caplog.text

    def test_thread_pool_matches_sequential(self, bad_people_df, people_set):
        sequential = Validator().validate(bad_people_df, people_set)
        pooled = Validator(workers=4).validate(bad_people_df, people_set)
        assert pooled.validations == sequential.validations


class TestRegistry:
    def test_one_check_per_kind(self):
        kinds = [c.kind for c in build_checks()]
        assert kinds == list(CheckKind)

    def test_kinds_match_validation_fields(self):
        v = Validation(name="x")
        for kind in CheckKind:
            assert hasattr(v, kind.value)
