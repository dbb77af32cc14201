import logging
import typing as t
from collections.abc import Sequence

import pandas as pd

from .. import utils

LOGGER = logging.getLogger(__name__)

DEFAULT_ID_COLS = ("dbn", "schoolname", "schooltype")
DEFAULT_SCORE_COL_PATTERNS = ("_t_11", "_s_11", "_p_11", "_tot_11")
DEFAULT_SCHOOL_TYPE = "High School"


def filter_school_type(
    df: pd.DataFrame,
    *,
    school_type: str = DEFAULT_SCHOOL_TYPE,
    col: str = "schooltype",
) -> pd.DataFrame:
    """
    Filter ``df`` to rows whose ``col`` value exactly equals ``school_type`` .
    """
    df_filtered = df.loc[df[col].eq(school_type).fillna(False), :]
    LOGGER.info(
        "filtered survey rows to %s='%s': %s of %s rows kept",
        col,
        school_type,
        len(df_filtered),
        len(df),
    )
    return df_filtered


def select_survey_columns(
    df: pd.DataFrame,
    *,
    id_cols: Sequence[str] = DEFAULT_ID_COLS,
    patterns: Sequence[str] = DEFAULT_SCORE_COL_PATTERNS,
) -> pd.DataFrame:
    """
    Select identifier columns plus all columns whose names contain
    at least one of ``patterns`` , preserving the original column order.

    Args:
        df
        id_cols: Identifier columns that must be present in ``df`` .
        patterns: Column name substrings that mark survey score columns,
            e.g. "_t_11" for 2011 teacher scores.

    Raises:
        ValueError: If any of ``id_cols`` isn't in ``df`` .
    """
    id_cols = utils.to_list(id_cols)
    if missing_cols := [col for col in id_cols if col not in df.columns]:
        raise ValueError(f"id columns {missing_cols} not found in survey data")
    score_cols = [
        col
        for col in df.columns
        if col not in id_cols and utils.contains_any(col, patterns)
    ]
    if not score_cols:
        LOGGER.warning("no survey score columns matched patterns %s", patterns)
    return df.loc[:, id_cols + score_cols]


def clean_survey_data(
    df: pd.DataFrame,
    *,
    school_type: t.Optional[str] = None,
    school_type_col: str = "schooltype",
    id_cols: Sequence[str] = DEFAULT_ID_COLS,
    patterns: Sequence[str] = DEFAULT_SCORE_COL_PATTERNS,
) -> pd.DataFrame:
    """
    Restrict raw survey data to relevant rows and columns: if ``school_type``
    is given, filter rows to that school type; then keep only the identifier
    and survey score columns.

    See Also:
        - :func:`filter_school_type()`
        - :func:`select_survey_columns()`
    """
    if school_type is not None:
        df = filter_school_type(df, school_type=school_type, col=school_type_col)
    return select_survey_columns(df, id_cols=id_cols, patterns=patterns)


def union_survey_data(*dfs: pd.DataFrame) -> pd.DataFrame:
    """
    Combine 2+ cleaned survey datasets row-wise. All datasets must have the same
    set of columns; the output follows the column order of the first one.

    Raises:
        ValueError: If no datasets are given, or their columns don't align.
    """
    if not dfs:
        raise ValueError("at least one survey dataset must be given")
    ref_cols = list(dfs[0].columns)
    for i, df in enumerate(dfs[1:], start=1):
        if set(df.columns) != set(ref_cols):
            missing_cols = sorted(set(ref_cols) - set(df.columns))
            extra_cols = sorted(set(df.columns) - set(ref_cols))
            raise ValueError(
                f"survey dataset {i} columns don't align with dataset 0: "
                f"missing={missing_cols}, extra={extra_cols}"
            )
    df_union = pd.concat(
        [df.loc[:, ref_cols] for df in dfs], axis="index", ignore_index=True
    )
    LOGGER.info(
        "combined %s survey datasets into rows x cols = %s", len(dfs), df_union.shape
    )
    return df_union


def join_school_data(
    df_survey: pd.DataFrame,
    df_school: pd.DataFrame,
    *,
    on: str = "dbn",
) -> pd.DataFrame:
    """
    Join school demographic/academic data onto survey data by school id ``on`` ,
    keeping all survey rows; school columns are null wherever there is no match,
    and school rows without a matching survey row are dropped.

    Raises:
        pandas.errors.MergeError: If school ids aren't unique in ``df_school`` .

    References:
        - https://pandas.pydata.org/pandas-docs/stable/reference/api/pandas.merge.html
    """
    df_joined = pd.merge(
        df_survey,
        df_school,
        on=on,
        how="left",
        validate="many_to_one",
        indicator="_merge",
    )
    num_matched = int(df_joined["_merge"].eq("both").sum())
    if num_matched == 0:
        LOGGER.warning(
            "no survey rows matched school data on '%s'; all school columns are null",
            on,
        )
    else:
        LOGGER.info(
            "matched %s of %s survey rows to school data on '%s'",
            num_matched,
            len(df_joined),
            on,
        )
    return df_joined.drop(columns="_merge")


def make_combined_survey_dataset(
    df_survey_gened: pd.DataFrame,
    df_survey_d75: pd.DataFrame,
    df_school: pd.DataFrame,
    *,
    school_type: str = DEFAULT_SCHOOL_TYPE,
    school_type_col: str = "schooltype",
    id_col: str = "dbn",
    id_cols: Sequence[str] = DEFAULT_ID_COLS,
    patterns: Sequence[str] = DEFAULT_SCORE_COL_PATTERNS,
) -> pd.DataFrame:
    """
    Make a combined school-level dataset from raw general-education and District 75
    survey datasets plus the school demographic/academic dataset: clean each survey,
    union them, then join school data onto the survey rows.

    Args:
        df_survey_gened: As output by :func:`dataio.read_survey_data()` ;
            filtered to ``school_type`` rows.
        df_survey_d75: As output by :func:`dataio.read_survey_data()` ;
            not filtered by school type, since it only covers District 75 schools.
        df_school: As output by :func:`dataio.read_school_data()` .
        school_type
        school_type_col
        id_col: School id column on which survey and school data are joined.
        id_cols
        patterns
    """
    df_gened = clean_survey_data(
        df_survey_gened,
        school_type=school_type,
        school_type_col=school_type_col,
        id_cols=id_cols,
        patterns=patterns,
    )
    df_d75 = clean_survey_data(df_survey_d75, id_cols=id_cols, patterns=patterns)
    return union_survey_data(df_gened, df_d75).pipe(
        join_school_data, df_school, on=id_col
    )
