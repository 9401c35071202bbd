# file_utils.py - read tabulated optical constants
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd
from scipy.constants import c

from drudefit.errors import InvalidInputError
from drudefit.samples import OpticalSampleSet

logger = logging.getLogger(__name__)

NK_COLUMNS = ["wavelength", "n", "k"]


def read_nk_table(
    path: Union[str, Path],
    name: Optional[str] = None,
    speed_of_light: float = c,
) -> OpticalSampleSet:
    """Load a ``wavelength,n,k`` text table (one triple per line, '#' comments allowed).

    Every row must parse as three numbers; a malformed row fails the whole
    load instead of being skipped.
    """
    path = Path(path)
    name = name if name is not None else path.stem
    if not path.is_file():
        raise InvalidInputError(f"Could not open file {path}")

    try:
        df = pd.read_csv(
            path, header=None, comment="#", skipinitialspace=True, skip_blank_lines=True,
            float_precision="round_trip",
        )
    except pd.errors.EmptyDataError as e:
        raise InvalidInputError(f"No data rows in {path}") from e
    except pd.errors.ParserError as e:
        raise InvalidInputError(f"Could not parse {path}: {e}") from e

    if df.shape[1] != 3:
        raise InvalidInputError(f"Expected 3 comma-separated columns (wavelength,n,k) in {path}, found {df.shape[1]}")
    df.columns = NK_COLUMNS

    samples = OpticalSampleSet.from_dataframe(df, name=name, speed_of_light=speed_of_light)
    logger.info(
        f"Loaded {len(samples)} data points for {name} between "
        f"{samples.wavelength[0]:g} and {samples.wavelength[-1]:g} nm"
    )
    return samples


def write_nk_table(samples: OpticalSampleSet, path: Union[str, Path]) -> Path:
    """Write ``samples`` back out in the same ``wavelength,n,k`` format."""
    path = Path(path)
    df = pd.DataFrame({"wavelength": samples.wavelength, "n": samples.n, "k": samples.k})
    df.to_csv(path, header=False, index=False)
    return path


__all__ = ["read_nk_table", "write_nk_table"]
