from __future__ import annotations

import pytest


def census_row(age_group: str, tm, tf, rm=0, rf=0, um=0, uf=0) -> dict[str, str]:
    """One CSV-shaped row with every count as text."""
    return {
        "Age Group": age_group,
        "Total Males": str(tm),
        "Total Females": str(tf),
        "Rural Males": str(rm),
        "Rural Females": str(rf),
        "Urban Males": str(um),
        "Urban Females": str(uf),
    }


@pytest.fixture
def census_rows() -> list[dict[str, str]]:
    # file order: aggregate row first, oldest age group last
    return [
        census_row("All ages", 600, 500, 400, 300, 200, 200),
        census_row("10-14", 100, 100, 80, 50, 20, 50),
        census_row("5-9", 200, 150, 120, 100, 80, 50),
        census_row("0-4", 300, 250, 200, 150, 100, 100),
        census_row("Age not stated", 5, 5, 1, 1, 4, 4),
    ]


CSV_TEXT = (
    "Age Group,Total Males,Total Females,Rural Males,Rural Females,Urban Males,Urban Females\n"
    "All ages,600,500,400,300,200,200\n"
    "10-14,100,100,80,50,20,50\n"
    "5-9,200,150,120,100,80,50\n"
    "0-4,300,250,200,150,100,100\n"
)


@pytest.fixture
def census_csv(tmp_path):
    path = tmp_path / "census.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")
    return path
