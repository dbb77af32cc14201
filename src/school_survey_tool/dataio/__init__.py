from . import schemas
from .read import from_csv_file, from_toml_file, from_tsv_file
from .survey import read_school_data, read_survey_data
