"""Load grouping input tables from csv, Excel, OpenDocument or Stata files."""

import logging
from pathlib import Path

import pandas as pd

from prioritized_grouping.errors import DataFormatError

logger = logging.getLogger(__name__)

DEFAULT_NA_VALUES = ("NA", '""', "")
SUPPORTED_EXTENSIONS = ("csv", "xls", "xlsx", "ods", "dta")


def file_extension(filename: Path | str) -> str:
    """Return the text after the last '.' of a file name ('' if there is none)."""
    name = Path(filename).name
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


def read_input(
    filepath: Path | str, na_values: tuple[str, ...] = DEFAULT_NA_VALUES
) -> pd.DataFrame:
    """Read a table, choosing the reader from the file extension.

    Args:
        filepath: Path to a .csv, .xls, .xlsx, .ods or .dta file
        na_values: Strings to treat as missing values

    Returns:
        DataFrame with the file's content

    Raises:
        DataFormatError: If the extension is not supported or the file cannot be read
    """
    ext = file_extension(filepath)
    if ext not in SUPPORTED_EXTENSIONS:
        raise DataFormatError(
            "Input file format has to be one of: "
            + ", ".join(f"'.{e}'" for e in SUPPORTED_EXTENSIONS)
        )

    logger.info("Reading %s file: %s", ext, filepath)
    try:
        if ext == "csv":
            df = pd.read_csv(filepath, na_values=list(na_values), keep_default_na=False)
        elif ext in ("xls", "xlsx"):
            df = pd.read_excel(filepath, na_values=list(na_values), keep_default_na=False)
        elif ext == "ods":
            df = pd.read_excel(
                filepath, engine="odf", na_values=list(na_values), keep_default_na=False
            )
        else:
            df = pd.read_stata(filepath)
    except pd.errors.EmptyDataError as e:
        raise DataFormatError(f"File is empty: {filepath}") from e
    except Exception as e:
        # Readers raise library-specific errors (e.g. zipfile.BadZipFile for ods)
        raise DataFormatError(f"Failed to read '{filepath}': {e}") from e

    return df


def load_pre_grouping(filepath: Path | str) -> pd.DataFrame:
    """Read a pre-grouping file with a subject id and a group column.

    Raises:
        DataFormatError: If the file cannot be read or has fewer than two columns
    """
    df = read_input(filepath)
    if df.shape[1] < 2:
        raise DataFormatError(
            f"Pre-grouping file needs a subject id and a group column: {filepath}"
        )
    return df.iloc[:, :2]
