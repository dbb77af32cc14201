import logging
import typing as t

import numpy as np
import pandas as pd

from . import utils

LOGGER = logging.getLogger(__name__)

DEFAULT_CORR_THRESHOLD = 0.25

# survey metric abbreviation => borough-level output column
BOROUGH_AVG_COLS = {
    "saf": "avg_saf_resp",
    "com": "avg_com_resp",
    "eng": "avg_eng_resp",
    "aca": "avg_aca_resp",
}


def assess_unique_values(data: pd.DataFrame, cols: str | list[str]) -> dict[str, int]:
    """
    Assess unique values in ``data`` given by the combination of columns in ``cols`` ,
    including counts of nunique, duplicates, and nulls.

    Args:
        data
        cols
    """
    unique_data = data.loc[:, utils.to_list(cols)]
    is_duplicated = unique_data.duplicated()
    return {
        "num_uniques": int(is_duplicated.eq(False).sum()),
        "num_dupes": int(is_duplicated.sum()),
        "num_with_null_values": int(unique_data.isna().sum(axis="columns").gt(0).sum()),
    }


def compute_null_counts(data: pd.DataFrame) -> pd.Series:
    """
    Count missing values per column in ``data`` , e.g. to diagnose how many
    survey rows didn't match school data in a join.
    """
    return data.isna().sum(axis="index").rename("null_count")


def compute_summary_stats(
    data: pd.DataFrame,
    *,
    include: t.Optional[str | list[str]] = None,
    exclude: t.Optional[str | list[str]] = None,
    percentiles: t.Optional[list[float]] = None,
) -> pd.DataFrame:
    """
    Compute summary stats for columns in ``data`` matching one or multiple dtypes
    using standard :meth:`pd.DataFrame.describe()` , supplemented with null count/pct.

    Args:
        data
        include: One or multiple dtypes whose columns will be included in result.
        exclude: One or multiple dtypes whose columns will be excluded from result.
        percentiles: Percentiles to include in result, given as floats between 0 and 1.

    References:
        - https://pandas.pydata.org/pandas-docs/stable/reference/api/pandas.DataFrame.select_dtypes.html
        - https://pandas.pydata.org/pandas-docs/stable/reference/api/pandas.DataFrame.describe.html
    """
    num_rows = data.shape[0]
    include = utils.to_list(include) if include is not None else None
    exclude = utils.to_list(exclude) if exclude is not None else None
    data_selected = data.select_dtypes(include=include, exclude=exclude)  # type: ignore
    data_described = data_selected.describe(percentiles=percentiles).T.assign(
        null_count=data_selected.isna().sum(),
        null_pct=lambda df: (100 * df["null_count"] / num_rows).round(decimals=1),
    )
    return data_described


def compute_group_counts_pcts(
    data: pd.DataFrame,
    cols: str | list[str],
    *,
    sort: bool = True,
    ascending: bool = False,
    dropna: bool = True,
) -> pd.DataFrame:
    """
    Compute value counts and percent totals in ``data`` for groups defined by ``cols`` .

    References:
        - https://pandas.pydata.org/docs/reference/api/pandas.DataFrame.value_counts.html
    """
    return (
        data[cols]
        .value_counts(sort=sort, ascending=ascending, dropna=dropna)
        .to_frame(name="count")
        .assign(
            pct=lambda df: (100 * df["count"] / df["count"].sum()).round(decimals=1)
        )
    )


def select_column_range(data: pd.DataFrame, start: str, end: str) -> list[str]:
    """
    Get names of the contiguous range of columns in ``data`` from ``start``
    through ``end`` , inclusive, in their current order.

    Raises:
        ValueError: If either column isn't in ``data`` , or ``end`` precedes ``start`` .
    """
    cols = data.columns.tolist()
    if missing_cols := [col for col in (start, end) if col not in cols]:
        raise ValueError(f"columns {missing_cols} not found in data")
    start_idx, end_idx = cols.index(start), cols.index(end)
    if end_idx < start_idx:
        raise ValueError(f"column '{end}' comes before column '{start}' in data")
    return cols[start_idx : end_idx + 1]


def compute_pairwise_correlations(
    data: pd.DataFrame,
    cols: t.Optional[str | list[str]] = None,
    *,
    method: t.Literal["pearson", "kendall", "spearman"] = "pearson",
) -> pd.DataFrame:
    """
    Compute the full pairwise correlation matrix between numeric columns in ``data`` ,
    using "pairwise-complete" observations: each pair's coefficient only uses rows
    where both variables are non-null, regardless of missingness in other columns.

    Diagonal entries are 1.0 for any column with at least one non-null value,
    even where the correlation is otherwise undefined (e.g. constant columns);
    off-diagonal pairs with too few complete observations are null.

    Args:
        data
        cols: Column(s) in ``data`` to correlate. If None, all numeric columns are used.
        method: Correlation method, as accepted by :meth:`pd.DataFrame.corr()` .

    References:
        - https://pandas.pydata.org/docs/reference/api/pandas.DataFrame.corr.html
    """
    df = data.loc[:, utils.to_list(cols)] if cols is not None else data
    df = df.select_dtypes(include="number")
    if cols is not None and (
        non_numeric_cols := [
            col for col in utils.to_list(cols) if col not in df.columns
        ]
    ):
        LOGGER.warning(
            "non-numeric columns %s excluded from correlation matrix", non_numeric_cols
        )
    df_corr = df.astype("float64").corr(method=method, min_periods=1)
    has_values = df.notna().any(axis="index").to_numpy()
    corr_values = df_corr.to_numpy(copy=True)
    diag_idx = np.arange(len(df_corr))
    corr_values[diag_idx, diag_idx] = np.where(
        has_values, 1.0, corr_values[diag_idx, diag_idx]
    )
    return pd.DataFrame(corr_values, index=df_corr.index, columns=df_corr.columns)


def to_long_correlations(df_corr: pd.DataFrame, ref_col: str) -> pd.DataFrame:
    """
    Reshape a correlation matrix into a long (variable, coefficient) table
    of each variable's correlation with ``ref_col`` , including ``ref_col`` itself.
    """
    if ref_col not in df_corr.columns:
        raise ValueError(f"ref_col='{ref_col}' not found in correlation matrix")
    return (
        df_corr[ref_col]
        .rename("coefficient")
        .rename_axis(index="variable")
        .reset_index(drop=False)
    )


def filter_strong_correlations(
    df_long: pd.DataFrame,
    *,
    threshold: float = DEFAULT_CORR_THRESHOLD,
    exclude_variable: t.Optional[str] = None,
) -> pd.DataFrame:
    """
    Filter long-form correlations to those whose absolute value exceeds ``threshold`` ,
    sorted by coefficient in descending order. Null coefficients never pass.

    Args:
        df_long: As output by :func:`to_long_correlations()` .
        threshold: Absolute coefficient above which a correlation counts as "strong".
        exclude_variable: Variable to drop from the result, typically the reference
            column's (trivial) correlation with itself.
    """
    df = df_long.loc[df_long["coefficient"].abs().gt(threshold), :]
    if exclude_variable is not None:
        df = df.loc[df["variable"].ne(exclude_variable), :]
    return df.sort_values(
        by="coefficient", ascending=False, kind="stable", ignore_index=True
    )


def compute_strong_correlations(
    data: pd.DataFrame,
    ref_col: str,
    cols: t.Optional[list[str]] = None,
    *,
    threshold: float = DEFAULT_CORR_THRESHOLD,
    exclude_self: bool = False,
    method: t.Literal["pearson", "kendall", "spearman"] = "pearson",
) -> pd.DataFrame:
    """
    Compute correlations between ``ref_col`` and other columns in ``data`` ,
    and filter them to those exceeding ``threshold`` in absolute value.

    Note:
        Unless ``exclude_self`` is True, the reference column's self-correlation
        (1.0) is the first row of the result.

    See Also:
        - :func:`compute_pairwise_correlations()`
        - :func:`to_long_correlations()`
        - :func:`filter_strong_correlations()`
    """
    if cols is None:
        cols = data.select_dtypes(include="number").columns.tolist()
    cols = list(utils.unique_elements_in_order([ref_col] + utils.to_list(cols)))
    df_corr = compute_pairwise_correlations(data, cols, method=method)
    df_strong = filter_strong_correlations(
        to_long_correlations(df_corr, ref_col),
        threshold=threshold,
        exclude_variable=ref_col if exclude_self else None,
    )
    LOGGER.info(
        "%s variables correlated with '%s' at |r| > %s",
        len(df_strong),
        ref_col,
        threshold,
    )
    return df_strong


def compute_borough_averages(
    data: pd.DataFrame,
    *,
    group_col: str = "boro",
    score_col_suffix: str = "_tot_11",
    sort_by: str = "avg_saf_resp",
    ascending: bool = False,
) -> pd.DataFrame:
    """
    Compute the average total-respondent score for each survey metric per borough
    (or other group given by ``group_col`` ), ranked by ``sort_by`` .

    Each metric gets its own output column, e.g. "avg_eng_resp" for engagement
    and "avg_aca_resp" for academic expectations.
    """
    agg_spec = {
        out_col: (f"{metric}{score_col_suffix}", "mean")
        for metric, out_col in BOROUGH_AVG_COLS.items()
    }
    if missing_cols := [
        col for col, _ in agg_spec.values() if col not in data.columns
    ]:
        raise ValueError(f"score columns {missing_cols} not found in data")
    return (
        data.groupby(by=group_col, dropna=True)
        .agg(**agg_spec)
        .sort_values(by=sort_by, ascending=ascending)
    )
