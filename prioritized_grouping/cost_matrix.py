"""Build the groups x subjects cost matrix from a wide input table."""

import logging

import pandas as pd

from prioritized_grouping.errors import DataFormatError

logger = logging.getLogger(__name__)


def normalize_ids(ids: pd.Series) -> pd.Series:
    """Render subject ids as strings, with whole floats written as integers.

    Spreadsheet readers return an id column as floats once it holds a blank
    cell, which would otherwise turn id 1 into "1.0".
    """

    def render(value) -> str:
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)

    return ids.map(render)


def validate_input_table(data: pd.DataFrame) -> pd.DataFrame:
    """Check the input shape and return a copy with string subject ids.

    The first column holds subject identifiers, every other column holds the
    costs/priorities of one group.

    Raises:
        DataFormatError: If the table has the wrong type or shape, subject ids
                         are missing or duplicated, or costs are not numeric
    """
    if not isinstance(data, pd.DataFrame):
        raise DataFormatError(
            "Supplied data has to be a data frame, with each row a subject and "
            "columns being groups, with the first column being subject identifiers"
        )
    if data.shape[1] < 2:
        raise DataFormatError(
            "Supplied data needs a subject identifier column and at least one group column"
        )

    # Blank trailing rows are common in spreadsheets
    table = data.dropna(how="all").reset_index(drop=True)
    ids = table.iloc[:, 0]
    if ids.isna().any():
        raise DataFormatError("Subject identifiers must not be missing")

    table[table.columns[0]] = normalize_ids(ids)

    duplicated = table.iloc[:, 0][table.iloc[:, 0].duplicated()].unique().tolist()
    if duplicated:
        raise DataFormatError(f"Subject identifiers must be unique, duplicated: {duplicated}")

    for column in table.columns[1:]:
        try:
            table[column] = pd.to_numeric(table[column])
        except (ValueError, TypeError) as e:
            raise DataFormatError(f"Group column '{column}' contains non-numeric costs") from e

    return table


def group_names(data: pd.DataFrame) -> list[str]:
    """Group names are the headers of every column but the first."""
    return [str(column) for column in data.columns[1:]]


def build_cost_matrix(
    data: pd.DataFrame, missing_cost: float | None = None
) -> pd.DataFrame:
    """Transpose the input table into a groups x subjects cost matrix.

    Parameters:
        data: Table with subject ids in the first column and one cost column per group
        missing_cost: Cost imputed for missing values; defaults to the number of groups

    Returns:
        DataFrame indexed by group name with one column per subject id
    """
    table = validate_input_table(data)

    cost = table.set_index(table.columns[0]).T.astype(float)
    cost.index = group_names(table)
    cost.columns = table.iloc[:, 0].tolist()

    if missing_cost is None:
        missing_cost = len(cost.index)

    n_missing = int(cost.isna().sum().sum())
    if n_missing:
        logger.info("Imputing %d missing costs with %s", n_missing, missing_cost)
    cost = cost.fillna(float(missing_cost))

    logger.debug("Cost matrix: %d groups x %d subjects", *cost.shape)
    return cost
