from pathlib import Path

import pytest
import yaml

from footprint_calc import EmissionInput, compute_total_emissions
from footprint_calc.constants import CarType, ConsumptionLevel
from footprint_calc.factors import (
    EmissionFactorTable,
    get_active_table,
    load_emission_factors,
    set_active_table,
)

ROOT = Path(__file__).resolve().parents[1]


def test_default_table_matches_reference_values():
    table = EmissionFactorTable()
    assert table.car_factor(CarType.MEDIUM) == pytest.approx(0.39)
    assert table.public_transport == pytest.approx(0.16)
    assert table.flight == pytest.approx(53.0)
    assert table.energy["electricity"] == pytest.approx(0.42)
    assert table.level_factor("meat", ConsumptionLevel.HIGH) == pytest.approx(2500.0)
    assert table.equivalences["trees_per_ton"] == pytest.approx(16.5)


def test_table_is_read_only():
    table = EmissionFactorTable()
    with pytest.raises(TypeError):
        table.car["medium"] = 1.0  # type: ignore[index]
    with pytest.raises(AttributeError):
        table.flight = 10.0  # type: ignore[misc]


def test_lookups_are_case_insensitive_and_fall_back_to_medium():
    table = EmissionFactorTable()
    assert table.car_factor(" Large ") == pytest.approx(0.57)
    assert table.car_factor(None) == table.car_factor("medium")
    assert table.level_factor("dairy", "LOTS") == table.level_factor("dairy", "medium")
    assert table.level_factor("meat", "none") == 0.0


def test_level_factor_rejects_non_level_table():
    with pytest.raises(KeyError):
        EmissionFactorTable().level_factor("car", "medium")


def test_from_mapping_overlays_defaults():
    table = EmissionFactorTable.from_mapping({"energy": {"electricity": 0.2}, "flight": 90})
    assert table.energy["electricity"] == pytest.approx(0.2)
    assert table.energy["natural_gas"] == pytest.approx(5.3)
    assert table.flight == pytest.approx(90.0)


@pytest.mark.parametrize(
    "cfg",
    [
        {"car": {"medium": -0.1}},
        {"flight": "lots"},
        {"shopping": {"clothing": True}},
        {"energy": 0.4},
        {"recycling": {"paper": -0.5}},
    ],
)
def test_from_mapping_rejects_invalid_factors(cfg):
    with pytest.raises(ValueError):
        EmissionFactorTable.from_mapping(cfg)


def test_shipped_factor_file_matches_defaults():
    path = ROOT / "data" / "footprint_calc" / "emission_factors" / "default.yaml"
    assert load_emission_factors(path).to_dict() == EmissionFactorTable().to_dict()


def test_load_emission_factors_reads_yaml(tmp_path: Path):
    path = tmp_path / "factors.yaml"
    path.write_text(yaml.safe_dump({"shopping": {"electronics": 1.5}}))
    table = load_emission_factors(path)
    assert table.shopping["electronics"] == pytest.approx(1.5)


def test_load_emission_factors_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_emission_factors(tmp_path / "missing.yaml")


def test_set_active_table_swaps_whole_table():
    inp = EmissionInput(car_mileage=100)
    before = compute_total_emissions(inp).category_breakdown["transportation"]
    replacement = EmissionFactorTable.from_mapping({"car": {"medium": 2.0}})
    previous = set_active_table(replacement)
    assert get_active_table() is replacement
    assert compute_total_emissions(inp).category_breakdown["transportation"] == pytest.approx(200.0)
    set_active_table(previous)
    assert compute_total_emissions(inp).category_breakdown["transportation"] == before


def test_set_active_table_requires_table():
    with pytest.raises(TypeError):
        set_active_table({"car": {}})  # type: ignore[arg-type]
