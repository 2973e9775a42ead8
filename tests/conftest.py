from datetime import date

import polars as pl
import pytest


@pytest.fixture
def people_df() -> pl.DataFrame:
    """Reference table: nulls in age, duplicates in area, a date column."""
    return pl.DataFrame({
        "id": [1, 2, 3, 4, 5],
        "name": ["Alice", "Bob", "Charlie", "Dee", "Eve"],
        "age": [34, None, 51, None, 27],
        "area": ["Urban", "Rural", "Urban", "Urban", "Rural"],
        "score": [0.5, 1.25, 3.0, 2.5, 0.75],
        "joined": [
            date(2021, 1, 4),
            date(2021, 3, 15),
            date(2022, 7, 1),
            date(2023, 2, 28),
            date(2020, 11, 30),
        ],
    })


@pytest.fixture
def bad_people_df() -> pl.DataFrame:
    """Same schema as people_df with violations in every column."""
    return pl.DataFrame({
        "id": [1, 1, 2, 10, None],
        "name": ["Al", "Bob", "Christopher", "Dee", "Eve"],
        "age": [34, None, 120, 12, 27],
        "area": ["Urban", "Suburban", "Suburban", "Rural", "Urban"],
        "score": [-1.0, 1.25, 9.5, 2.5, 0.75],
        "joined": [
            date(2019, 1, 1),
            date(2021, 3, 15),
            date(2022, 7, 1),
            date(2024, 6, 1),
            date(2020, 11, 30),
        ],
    })


@pytest.fixture
def constraints_path(tmp_path, people_df):
    """People constraint set saved as JSON."""
    from konstrain.constraints.constraint_set import ConstraintSet

    path = tmp_path / "people.json"
    ConstraintSet.from_table(people_df, name="people").save(path)
    return path


@pytest.fixture
def people_csv(tmp_path, people_df):
    path = tmp_path / "people.csv"
    people_df.write_csv(path)
    return path


@pytest.fixture
def bad_people_csv(tmp_path, bad_people_df):
    path = tmp_path / "bad_people.csv"
    bad_people_df.write_csv(path)
    return path
