"""DataFrame conversion utilities."""

from typing import Iterable

import pandas as pd


def records_to_dataframe(
    records: Iterable[dict],
    flatten: bool = True,
) -> pd.DataFrame:
    """
    Convert iterable of record dicts to pandas DataFrame.

    Args:
        records: Iterable of dictionaries (e.g., from ConfluenceClient.search)
        flatten: If True, nested objects become dotted columns
                 (e.g. "space.key")

    Returns:
        pandas DataFrame with all records

    Example:
        records = [{"id": "123", "space": {"key": "HOME"}}]
        df = records_to_dataframe(records)
        print(df.columns)  # ['id', 'space.key']
    """
    records = list(records)

    if not records:
        return pd.DataFrame()

    if flatten:
        return pd.json_normalize(records)
    return pd.DataFrame(records)
