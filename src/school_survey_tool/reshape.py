import logging
import typing as t
from collections.abc import Sequence

import pandas as pd

from . import utils

LOGGER = logging.getLogger(__name__)

# ordered (substring, category) rules, evaluated first-match-wins against col names
RESPONSE_TYPE_RULES: list[tuple[str, str]] = [
    ("_t_", "teacher"),
    ("_p_", "parent"),
    ("_s_", "student"),
    ("_to", "total"),
]
RESPONSE_TYPE_DEFAULT = "NA"

METRIC_RULES: list[tuple[str, str]] = [
    ("saf", "safety and respect"),
    ("com", "communication"),
    ("eng", "engagement"),
]
# catch-all: anything not matched above counts as academic expectations
METRIC_DEFAULT = "academic expectations"

DEFAULT_ID_COLS = ("dbn", "schoolname", "schooltype")
DEFAULT_SCORE_COL_PATTERNS = ("_t_11", "_s_11", "_p_11")
TOTAL_SCORE_COL_PATTERN = "_tot_11"


def match_first_rule(
    value: str, rules: Sequence[tuple[str, str]], *, default: str
) -> str:
    """
    Get the category of the first rule whose substring is found in ``value`` ,
    or ``default`` if none match.
    """
    for substr, category in rules:
        if substr in value:
            return category
    return default


def derive_response_type(ser: pd.Series) -> pd.Series:
    """Derive respondent type (teacher, parent, ...) from survey question names."""
    return ser.map(
        lambda val: match_first_rule(
            val, RESPONSE_TYPE_RULES, default=RESPONSE_TYPE_DEFAULT
        )
    ).astype("string")


def derive_metric(ser: pd.Series) -> pd.Series:
    """Derive survey metric (safety and respect, ...) from survey question names."""
    return ser.map(
        lambda val: match_first_rule(val, METRIC_RULES, default=METRIC_DEFAULT)
    ).astype("string")


def melt_survey_scores(
    df: pd.DataFrame,
    *,
    value_cols: t.Optional[list[str]] = None,
    id_cols: t.Optional[list[str]] = None,
    include_total: bool = False,
    var_name: str = "survey_question",
    value_name: str = "score",
) -> pd.DataFrame:
    """
    Reshape wide survey score columns in ``df`` into long form, with one row
    per school and score column, tagged by respondent type and survey metric
    as derived from the original column name.

    Args:
        df
        value_cols: Score columns to reshape. If None, all columns containing
            a per-respondent score pattern (e.g. "_s_11") are used, plus
            total-respondent score columns if ``include_total`` is True.
        id_cols: Columns to carry through as identifiers. If None, all columns
            other than ``value_cols`` are kept.
        include_total: Whether total-respondent score columns are included by default.
        var_name: Name of output column holding original score column names.
        value_name: Name of output column holding scores.

    References:
        - https://pandas.pydata.org/docs/reference/api/pandas.melt.html
    """
    if value_cols is None:
        patterns = list(DEFAULT_SCORE_COL_PATTERNS)
        if include_total:
            patterns.append(TOTAL_SCORE_COL_PATTERN)
        value_cols = [col for col in df.columns if utils.contains_any(col, patterns)]
    if not value_cols:
        raise ValueError("no survey score columns found to reshape")
    if id_cols is None:
        id_cols = [col for col in df.columns if col not in value_cols]
    df_long = df.melt(
        id_vars=id_cols,
        value_vars=value_cols,
        var_name=var_name,
        value_name=value_name,
    ).assign(
        response_type=lambda df: derive_response_type(df[var_name]),
        metric=lambda df: derive_metric(df[var_name]),
    )
    LOGGER.info(
        "reshaped %s score columns into rows x cols = %s",
        len(value_cols),
        df_long.shape,
    )
    return df_long


def summarize_scores_by_response_type(
    df_long: pd.DataFrame,
    *,
    value_col: str = "score",
    group_cols: Sequence[str] = ("metric", "response_type"),
) -> pd.DataFrame:
    """
    Compare score distributions across respondent types for each survey metric,
    via count, mean, and median of non-null scores.
    """
    return (
        df_long.groupby(by=list(group_cols), observed=True)[value_col]
        .agg(["count", "mean", "median"])
        .reset_index(drop=False)
    )
