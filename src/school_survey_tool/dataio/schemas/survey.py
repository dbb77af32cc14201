# ruff: noqa: F821
# mypy: ignore-errors
import functools as ft
import typing as t

import pandera as pda
import pandera.typing as pt

SurveyScoreField = ft.partial(pda.Field, nullable=True, ge=0.0, le=10.0)


class RawSurveyDataSchema(pda.DataFrameModel):
    """
    Schema (aka ``DataFrameModel``) for raw NYC school survey data, after column names
    have been standardized; validates ids and coerces the per-respondent survey scores
    (teacher, student, parent, total) for each of the four survey metrics.

    Applies to both general-education and District 75 (special-education) surveys.
    Extra columns are allowed, since the raw files carry hundreds of per-question cols.

    References:
        - https://pandera.readthedocs.io/en/stable/dataframe_models.html
    """

    dbn: pt.Series["string"]
    schoolname: pt.Series["string"] = pda.Field(nullable=True)
    schooltype: t.Optional[pt.Series["string"]] = pda.Field(nullable=True)
    saf_p_11: pt.Series["float64"] = SurveyScoreField()
    com_p_11: pt.Series["float64"] = SurveyScoreField()
    eng_p_11: pt.Series["float64"] = SurveyScoreField()
    aca_p_11: pt.Series["float64"] = SurveyScoreField()
    saf_t_11: pt.Series["float64"] = SurveyScoreField()
    com_t_11: pt.Series["float64"] = SurveyScoreField()
    eng_t_11: pt.Series["float64"] = SurveyScoreField()
    aca_t_11: pt.Series["float64"] = SurveyScoreField()
    saf_s_11: pt.Series["float64"] = SurveyScoreField()
    com_s_11: pt.Series["float64"] = SurveyScoreField()
    eng_s_11: pt.Series["float64"] = SurveyScoreField()
    aca_s_11: pt.Series["float64"] = SurveyScoreField()
    saf_tot_11: pt.Series["float64"] = SurveyScoreField()
    com_tot_11: pt.Series["float64"] = SurveyScoreField()
    eng_tot_11: pt.Series["float64"] = SurveyScoreField()
    aca_tot_11: pt.Series["float64"] = SurveyScoreField()

    class Config:
        coerce = True
        strict = False
        unique = ["dbn"]
