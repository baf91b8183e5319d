import math

import numpy as np
import pytest

from footprint_calc.constants import CarType, ConsumptionLevel
from footprint_calc.errors import InvalidInputError
from footprint_calc.inputs import EmissionInput, ensure_non_negative


def test_defaults_are_zero_quantities_and_medium_levels():
    inp = EmissionInput()
    assert inp.car_mileage == 0.0
    assert inp.car_type is CarType.MEDIUM
    assert inp.local_food_level is ConsumptionLevel.MEDIUM


def test_strings_are_coerced_to_enum_members():
    inp = EmissionInput(car_type=" Electric", meat_level="NONE")
    assert inp.car_type is CarType.ELECTRIC
    assert inp.meat_level is ConsumptionLevel.NONE


def test_unknown_levels_are_kept_as_given():
    inp = EmissionInput(car_type="spaceship", dairy_level="sometimes")
    assert inp.car_type == "spaceship"
    assert inp.dairy_level == "sometimes"


@pytest.mark.parametrize("value", [-0.01, math.nan, math.inf, "abc", "", None, True, [1]])
def test_invalid_numeric_values_raise(value):
    with pytest.raises(InvalidInputError) as excinfo:
        EmissionInput(flight_hours=value)
    assert excinfo.value.field == "flight_hours"


@pytest.mark.parametrize("value", [-(10**400), 10**400])
def test_integers_beyond_float_range_are_rejected(value):
    with pytest.raises(InvalidInputError, match="must be finite") as excinfo:
        ensure_non_negative("car_mileage", value)
    assert excinfo.value.field == "car_mileage"
    assert excinfo.value.reason == "must be finite"


def test_numeric_strings_and_numpy_values_are_accepted():
    inp = EmissionInput(car_mileage="1200.5", flight_hours=np.int64(3))
    assert inp.car_mileage == pytest.approx(1200.5)
    assert inp.flight_hours == 3.0


def test_invalid_input_error_is_a_value_error():
    with pytest.raises(ValueError):
        ensure_non_negative("clothing_spend", -10)


def test_from_mapping_accepts_request_names():
    inp = EmissionInput.from_mapping(
        {
            "carMileage": 10000,
            "carType": "small",
            "publicTransportMiles": 100,
            "flightHours": 2,
            "electricityKwhPerMonth": 500,
            "naturalGasThermsPerMonth": 10,
            "heatingOilGallonsPerMonth": 1,
            "meatLevel": "low",
            "dairyLevel": "high",
            "localFoodLevel": "none",
            "clothingSpend": 10,
            "electronicsSpend": 20,
            "otherShoppingSpend": 30,
        }
    )
    assert inp.car_type is CarType.SMALL
    assert inp.public_transport_miles == 100.0
    assert inp.local_food_level is ConsumptionLevel.NONE
    assert inp.other_shopping_spend == 30.0


def test_from_mapping_accepts_legacy_names_and_ignores_unknown_keys():
    inp = EmissionInput.from_mapping(
        {
            "publicTransport": 40,
            "flights": 3,
            "electricity": 200,
            "meatConsumption": "high",
            "localFood": "low",
            "clothing": 5,
            "notes": "weekly commute",
        }
    )
    assert inp.public_transport_miles == 40.0
    assert inp.flight_hours == 3.0
    assert inp.electricity_kwh_per_month == 200.0
    assert inp.meat_level is ConsumptionLevel.HIGH
    assert inp.local_food_level is ConsumptionLevel.LOW
    assert inp.clothing_spend == 5.0


def test_from_mapping_treats_missing_cells_as_defaults():
    inp = EmissionInput.from_mapping({"car_mileage": float("nan"), "carType": None})
    assert inp.car_mileage == 0.0
    assert inp.car_type is CarType.MEDIUM


def test_to_dict_round_trips_through_from_mapping():
    inp = EmissionInput(car_mileage=5, meat_level="low", car_type="unknown-model")
    payload = inp.to_dict()
    assert payload["carMileage"] == 5.0
    assert payload["meatLevel"] == "low"
    assert EmissionInput.from_mapping(payload) == inp


def test_from_mapping_requires_mapping():
    with pytest.raises(TypeError):
        EmissionInput.from_mapping([("carMileage", 1)])  # type: ignore[arg-type]
