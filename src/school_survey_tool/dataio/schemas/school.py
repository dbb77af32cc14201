# ruff: noqa: F821
# mypy: ignore-errors
import functools as ft
import typing as t

import pandera as pda
import pandera.typing as pt

PctField = ft.partial(pda.Field, nullable=True, ge=0.0, le=100.0)
SATSectionScoreField = ft.partial(pda.Field, nullable=True, ge=200.0, le=800.0)


class RawSchoolDataSchema(pda.DataFrameModel):
    """
    Schema (aka ``DataFrameModel``) for the combined NYC school demographic/academic
    dataset (one row per school), after column names have been standardized.

    Only the columns used downstream are declared; everything else passes through.

    References:
        - https://pandera.readthedocs.io/en/stable/dataframe_models.html
    """

    dbn: pt.Series["string"] = pda.Field(unique=True)
    school_name: t.Optional[pt.Series["string"]] = pda.Field(nullable=True)
    avg_sat_score: pt.Series["float64"] = pda.Field(nullable=True, ge=600.0, le=2400.0)
    read_avg: t.Optional[pt.Series["float64"]] = SATSectionScoreField()
    math_avg: t.Optional[pt.Series["float64"]] = SATSectionScoreField()
    write_avg: t.Optional[pt.Series["float64"]] = SATSectionScoreField()
    frl_percent: t.Optional[pt.Series["float64"]] = PctField()
    asian_per: t.Optional[pt.Series["float64"]] = PctField()
    black_per: t.Optional[pt.Series["float64"]] = PctField()
    hispanic_per: t.Optional[pt.Series["float64"]] = PctField()
    white_per: t.Optional[pt.Series["float64"]] = PctField()
    male_per: t.Optional[pt.Series["float64"]] = PctField()
    female_per: t.Optional[pt.Series["float64"]] = PctField()
    boro: t.Optional[pt.Series["string"]] = pda.Field(nullable=True)

    class Config:
        coerce = True
        strict = False
