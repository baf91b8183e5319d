"""Run footprint calculations for a configuration file or a CSV of input profiles.

Usage
-----
```bash
python scripts/run_footprint.py --config config.yaml
python scripts/run_footprint.py --input data/footprint_calc/profiles.csv --output results/footprints.csv
```

With ``--config`` the ``footprint_calc`` section of the YAML file drives the
run. With ``--input`` the profiles CSV is processed directly, optionally with a
custom ``--factors`` YAML table. Output CSVs have the columns:

- ``id`` – profile identifier from the input file.
- ``transportation``, ``energy``, ``food``, ``shopping`` – category emissions (kg CO₂e/year).
- ``total_emissions`` – sum of the categories (kg CO₂e/year).
- ``trees_to_offset`` … ``home_energy_days_equivalent`` – equivalences of the total.
- ``standing`` – band relative to the global and regional averages.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

sys.path.insert(0, str(ROOT / "src"))

from footprint_calc import (  # noqa: E402
    CalculationRecord,
    EmissionFactorTable,
    InvalidInputError,
    classify_standing,
    compute_equivalences,
    compute_total_emissions,
    load_emission_factors,
    run_from_config,
)
from footprint_calc.writers import read_inputs_csv, write_results_csv  # noqa: E402

LOGGER = logging.getLogger("footprint_calc.run")


def _run_from_inputs(
    input_path: Path, factors_path: Path | None, output_path: Path | None
) -> dict[str, CalculationRecord]:
    table = load_emission_factors(factors_path) if factors_path else EmissionFactorTable()
    records: dict[str, CalculationRecord] = {}
    for profile_id, inp in read_inputs_csv(input_path).items():
        try:
            result = compute_total_emissions(inp, table)
        except InvalidInputError as exc:
            raise exc.with_context(f"{profile_id}.") from exc
        records[profile_id] = CalculationRecord(
            profile_id=profile_id,
            inputs=inp,
            result=result,
            equivalences=compute_equivalences(result, table),
            standing=classify_standing(result.total_tons),
        )
    if output_path is not None:
        write_results_csv(records, output_path)
        LOGGER.info("Results written to %s", output_path)
    return records


def main(argv: list[str] | None = None) -> dict[str, CalculationRecord]:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")

    parser = argparse.ArgumentParser(
        description="Calculate annual carbon footprints from lifestyle profiles"
    )
    parser.add_argument("--config", help="Path to a YAML config with a footprint_calc section")
    parser.add_argument("--input", help="CSV of input profiles (one row per profile, 'id' column)")
    parser.add_argument("--factors", help="YAML emission factor table used with --input")
    parser.add_argument("--output", help="Destination CSV used with --input")
    args = parser.parse_args(argv)

    if args.config and args.input:
        parser.error("Use either --config or --input, not both.")
    if not (args.config or args.input):
        parser.error("Specify --config or --input.")
    try:
        if args.config:
            LOGGER.info("Running footprint_calc for %s", args.config)
            records = run_from_config(Path(args.config))
        else:
            records = _run_from_inputs(
                Path(args.input),
                Path(args.factors) if args.factors else None,
                Path(args.output) if args.output else None,
            )
    except InvalidInputError as exc:
        parser.exit(2, f"{parser.prog}: error: {exc}\n")

    for profile_id, record in records.items():
        breakdown = ", ".join(
            f"{category}={value:.1f}" for category, value in record.result.category_breakdown.items()
        )
        LOGGER.info(
            "Profile '%s': %.1f kg CO2e/year (%s); standing %s",
            profile_id,
            record.result.total_emissions,
            breakdown,
            record.standing.name.lower(),
        )
    return records


if __name__ == "__main__":
    main()
