import pathlib

import pydantic as pyd

from ..dataio import read


def load_config(
    file_path: str | pathlib.Path, schema: type[pyd.BaseModel]
) -> pyd.BaseModel:
    """
    Load config from ``file_path`` and validate it using ``schema`` ,
    returning an instance with configuration fields accessible by attribute.
    """
    config = read.from_toml_file(file_path)
    return schema.model_validate(config)
