import logging
import pathlib

import pandas as pd

try:
    import tomllib  # noqa
except ImportError:  # => PY3.10
    import tomli as tomllib  # noqa

LOGGER = logging.getLogger(__name__)


def from_csv_file(file_path: str | pathlib.Path, **kwargs: object) -> pd.DataFrame:
    """
    Read data from a comma-delimited file at ``file_path`` and return it as a DataFrame,
    with column dtypes inferred from the data.

    Args:
        file_path: Path to file on disk from which data will be read.
        **kwargs: Additional arguments passed as-is into :func:`pandas.read_csv()` .

    Raises:
        ValueError: If data rows have more fields than the header, in which case
            pandas would silently shift the extra leading fields into the index.

    See Also:
        - https://pandas.pydata.org/pandas-docs/stable/reference/api/pandas.read_csv.html
    """
    df = pd.read_csv(file_path, header="infer", **kwargs)  # type: ignore
    assert isinstance(df, pd.DataFrame)  # type guard
    if "index_col" not in kwargs and not isinstance(df.index, pd.RangeIndex):
        raise ValueError(
            f"rows in '{file_path}' have more fields than its header "
            f"({df.index.nlevels} extra); file is malformed"
        )
    LOGGER.info("loaded rows x cols = %s from '%s'", df.shape, file_path)
    return df


def from_tsv_file(file_path: str | pathlib.Path, **kwargs: object) -> pd.DataFrame:
    """
    Read data from a tab-delimited file at ``file_path`` and return it as a DataFrame.

    See Also:
        - :func:`from_csv_file()`
    """
    return from_csv_file(file_path, sep="\t", **kwargs)


def from_toml_file(file_path: str | pathlib.Path) -> dict[str, object]:
    """
    Read data from ``file_path`` and return it as a dict.

    Args:
        file_path: Path to file on disk from which data will be read.
    """
    fpath = pathlib.Path(file_path).resolve()
    with fpath.open(mode="rb") as f:
        data = tomllib.load(f)
    LOGGER.info("loaded config from '%s'", fpath)
    assert isinstance(data, dict)  # type guard
    return data
