from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Mapping

import pandas as pd

from .constants import CATEGORIES, RESULT_UNIT
from .errors import InvalidInputError
from .inputs import EmissionInput
from .standing import describe_standing

if TYPE_CHECKING:  # pragma: no cover
    from .calculator import CalculationRecord

ID_COLUMN = "id"
EQUIVALENCE_COLUMNS = (
    "trees_to_offset",
    "miles_driven_equivalent",
    "phone_charges_equivalent",
    "home_energy_days_equivalent",
)


def read_inputs_csv(path: Path | str) -> dict[str, EmissionInput]:
    """Read one input profile per row, keyed by the ``id`` column."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Inputs file not found: {path}")
    # Read as text: ids keep leading zeros and "none" stays a consumption level.
    df = pd.read_csv(path, comment="#", dtype=str, keep_default_na=False, na_values=[""])
    if ID_COLUMN not in df.columns:
        raise ValueError(f"Inputs file '{path}' must contain an '{ID_COLUMN}' column.")
    if df[ID_COLUMN].isna().any():
        raise ValueError(f"Inputs file '{path}' has rows without an '{ID_COLUMN}'.")
    df[ID_COLUMN] = df[ID_COLUMN].str.strip()
    duplicated = sorted(df.loc[df[ID_COLUMN].duplicated(), ID_COLUMN].unique())
    if duplicated:
        raise ValueError(f"Duplicate profile ids in '{path}': {duplicated}")

    profiles: dict[str, EmissionInput] = {}
    for row in df.to_dict(orient="records"):
        profile_id = row.pop(ID_COLUMN)
        try:
            profiles[profile_id] = EmissionInput.from_mapping(row)
        except InvalidInputError as exc:
            raise exc.with_context(f"{profile_id}.") from exc
    return profiles


def build_results_frame(records: Mapping[str, CalculationRecord]) -> pd.DataFrame:
    rows = []
    include_equivalences = any(rec.equivalences is not None for rec in records.values())
    for profile_id, record in records.items():
        row: dict[str, object] = {ID_COLUMN: profile_id}
        row.update(record.result.category_breakdown)
        row["total_emissions"] = record.result.total_emissions
        if include_equivalences:
            for column in EQUIVALENCE_COLUMNS:
                row[column] = (
                    getattr(record.equivalences, column) if record.equivalences else float("nan")
                )
        row["standing"] = describe_standing(record.standing)
        rows.append(row)

    columns = [ID_COLUMN, *CATEGORIES, "total_emissions"]
    if include_equivalences:
        columns.extend(EQUIVALENCE_COLUMNS)
    columns.append("standing")
    return pd.DataFrame(rows, columns=columns)


def write_results_csv(records: Mapping[str, CalculationRecord], destination: Path | str) -> Path:
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    df = build_results_frame(records)
    with destination.open("w", encoding="utf-8", newline="") as fh:
        fh.write(f"# unit: {RESULT_UNIT}\n")
        df.to_csv(fh, index=False)
    return destination
