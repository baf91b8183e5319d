"""Ensure the project package is importable during tests without installation."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

root_path = str(ROOT)
if root_path not in sys.path:
    sys.path.insert(0, root_path)

src_path = str(SRC)
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from footprint_calc import factors as _factors  # noqa: E402


@pytest.fixture(autouse=True)
def restore_active_table():
    previous = _factors.get_active_table()
    yield
    _factors.set_active_table(previous)


@pytest.fixture
def profiles_csv(tmp_path: Path) -> Path:
    path = tmp_path / "profiles.csv"
    path.write_text(
        "# test profiles\n"
        "id,carMileage,carType,publicTransportMiles,flightHours,electricityKwhPerMonth,"
        "naturalGasThermsPerMonth,heatingOilGallonsPerMonth,meatLevel,dairyLevel,localFoodLevel,"
        "clothingSpend,electronicsSpend,otherShoppingSpend\n"
        "commuter,12000,medium,500,6,600,30,0,medium,medium,low,800,500,1200\n"
        "urban_vegan,0,small,3000,2,250,0,0,none,none,high,300,200,400\n"
        "rural_family,18000,large,0,10,1100,0,40,high,high,medium,1500,1200,2500\n",
        encoding="utf-8",
    )
    return path
