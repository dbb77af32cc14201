import re
import typing as t

import pydantic as pyd

from .. import eda
from ..preprocessing import survey


class SurveyProjectConfig(pyd.BaseModel):
    """Configuration schema for NYC school survey analysis projects."""

    project_id: str = pyd.Field(
        ...,
        description=(
            "Unique (ASCII-only) identifier for the analysis; used in naming things "
            "such as output directories and figure files"
        ),
    )
    project_name: t.Optional[str] = pyd.Field(
        default=None, description="Readable 'display' name for the analysis"
    )

    # shared parameters
    id_col: str = pyd.Field(
        default="dbn",
        description="School identifier ('District-Borough-Number') column in all datasets",
    )
    borough_col: str = "boro"

    datasets: "DatasetsConfig"
    preprocessing: "PreprocessingConfig" = pyd.Field(
        default_factory=lambda: PreprocessingConfig()
    )
    correlation: "CorrelationConfig" = pyd.Field(
        default_factory=lambda: CorrelationConfig()
    )
    plotting: "PlottingConfig" = pyd.Field(default_factory=lambda: PlottingConfig())

    @pyd.field_validator("project_id", mode="after")
    @classmethod
    def check_project_id_isascii(cls, value: str) -> str:
        if not re.search(r"^\w+$", value, flags=re.ASCII):
            raise ValueError(f"project_id='{value}' is not ASCII-only")
        return value

    # NOTE: this is for *pydantic* model configuration
    model_config = pyd.ConfigDict(extra="forbid", strict=True)


class DatasetsConfig(pyd.BaseModel):
    school: "DatasetIOConfig" = pyd.Field(
        description="Combined school demographic/academic data, comma-delimited"
    )
    survey_gened: "DatasetIOConfig" = pyd.Field(
        description="General-education school survey data, tab-delimited"
    )
    survey_d75: "DatasetIOConfig" = pyd.Field(
        description="District 75 (special-education) school survey data, tab-delimited"
    )


class DatasetIOConfig(pyd.BaseModel):
    file_path: str = pyd.Field(
        ..., description="Full, absolute (or working-dir-relative) path to dataset on disk"
    )
    encoding: t.Optional[str] = pyd.Field(
        default=None,
        description="Text encoding of file; if null, the reader's default is used",
    )
    validate_schema: bool = pyd.Field(
        default=True,
        description="Whether to parse+validate the dataset via its pandera schema",
    )


class PreprocessingConfig(pyd.BaseModel):
    school_type: str = pyd.Field(
        default=survey.DEFAULT_SCHOOL_TYPE,
        description="School type to which general-education survey rows are filtered",
    )
    school_type_col: str = "schooltype"
    id_cols: list[str] = pyd.Field(
        default=list(survey.DEFAULT_ID_COLS),
        description="Survey identifier columns kept alongside survey score columns",
    )
    score_col_patterns: list[str] = pyd.Field(
        default=list(survey.DEFAULT_SCORE_COL_PATTERNS),
        description=(
            "Column name substrings that mark survey score columns to keep, "
            "one per respondent type (teacher, student, parent, total)"
        ),
        min_length=1,
    )
    include_total_in_long: bool = pyd.Field(
        default=False,
        description=(
            "Whether total-respondent scores are included when reshaping "
            "survey scores into long form"
        ),
    )


class CorrelationConfig(pyd.BaseModel):
    ref_col: str = pyd.Field(
        default="avg_sat_score",
        description="Outcome column against which survey scores are correlated",
    )
    score_cols_start: str = pyd.Field(
        default="saf_p_11",
        description="First column of the contiguous range of survey score columns",
    )
    score_cols_end: str = pyd.Field(
        default="aca_tot_11",
        description="Last column of the contiguous range of survey score columns",
    )
    threshold: float = pyd.Field(
        default=eda.DEFAULT_CORR_THRESHOLD,
        description="Absolute coefficient above which a correlation counts as 'strong'",
        ge=0.0,
        lt=1.0,
    )
    method: t.Literal["pearson", "kendall", "spearman"] = "pearson"


class PlottingConfig(pyd.BaseModel):
    output_dir: t.Optional[str] = pyd.Field(
        default=None,
        description="Directory to which figures are saved; if null, figures aren't saved",
    )
    file_format: t.Literal["png", "pdf", "svg"] = "png"
    dpi: int = pyd.Field(default=150, gt=0)
    scatter_alpha: float = pyd.Field(default=0.3, gt=0.0, le=1.0)
