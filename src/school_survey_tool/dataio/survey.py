import logging
import pathlib
import typing as t

import pandas as pd
import pandera as pda
import pandera.errors

from .. import utils
from . import read

LOGGER = logging.getLogger(__name__)

# raw survey files are exported from excel on windows, not utf-8
DEFAULT_SURVEY_ENCODING = "windows-1252"


def read_school_data(
    file_path: str | pathlib.Path,
    *,
    schema: t.Optional[type[pda.DataFrameModel]] = None,
    converter_func: t.Optional[t.Callable[[pd.DataFrame], pd.DataFrame]] = None,
    **kwargs: object,
) -> pd.DataFrame:
    """
    Read the combined school demographic/academic dataset from a comma-delimited file,
    standardize its column names, and optionally parse+validate it via ``schema`` .

    Args:
        file_path
        schema: "DataFrameModel", such as those specified in :mod:`dataio.schemas` ,
            used to parse and validate the raw data. If None, parsing/validation
            is skipped, and the data is returned with inferred dtypes.
        converter_func: If the raw data is incompatible with ``schema`` ,
            provide a function that takes the raw dataframe as its sole input,
            performs whatever (minimal) transformations necessary to bring the data
            into line with ``schema`` , and then returns it.
        **kwargs: Additional arguments passed as-is into :func:`pandas.read_csv()` .

    See Also:
        - :func:`read.from_csv_file()`
    """
    df = read.from_csv_file(file_path, **kwargs).rename(
        columns=utils.convert_to_snake_case
    )
    return _maybe_convert_maybe_validate_data(df, converter_func, schema)


def read_survey_data(
    file_path: str | pathlib.Path,
    *,
    schema: t.Optional[type[pda.DataFrameModel]] = None,
    converter_func: t.Optional[t.Callable[[pd.DataFrame], pd.DataFrame]] = None,
    encoding: str = DEFAULT_SURVEY_ENCODING,
    **kwargs: object,
) -> pd.DataFrame:
    """
    Read a raw school survey dataset (general-education or District 75)
    from a tab-delimited file, standardize its column names, and optionally
    parse+validate it via ``schema`` .

    Args:
        file_path
        schema: "DataFrameModel", such as :class:`schemas.RawSurveyDataSchema` .
            If None, parsing/validation is skipped.
        converter_func: Function applied to the raw dataframe before validation.
        encoding: Text encoding of the raw file.
        **kwargs: Additional arguments passed as-is into :func:`pandas.read_csv()` .

    See Also:
        - :func:`read.from_tsv_file()`
    """
    df = read.from_tsv_file(file_path, encoding=encoding, **kwargs).rename(
        columns=utils.convert_to_snake_case
    )
    return _maybe_convert_maybe_validate_data(df, converter_func, schema)


def _maybe_convert_maybe_validate_data(
    df: pd.DataFrame,
    converter_func: t.Optional[t.Callable[[pd.DataFrame], pd.DataFrame]] = None,
    schema: t.Optional[type[pda.DataFrameModel]] = None,
) -> pd.DataFrame:
    if converter_func is not None:
        LOGGER.info("applying %s converter to raw data", converter_func)
        df = converter_func(df)
    if schema is None:
        return df
    else:
        try:
            df = schema.validate(df, lazy=True)  # type: ignore
            return df  # type: ignore
        except pandera.errors.SchemaErrors:
            LOGGER.error("unable to parse/validate raw data")
            raise
