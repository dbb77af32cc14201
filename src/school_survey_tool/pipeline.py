import dataclasses
import logging
import pathlib
import typing as t

import matplotlib.figure
import pandas as pd

from . import dataio, eda, plotting, reshape, utils
from .configs.survey import DatasetIOConfig, SurveyProjectConfig
from .preprocessing import survey

LOGGER = logging.getLogger(__name__)


@dataclasses.dataclass
class SurveyAnalysisResults:
    """Tables and figures produced by a single run of the survey analysis."""

    df_combined: pd.DataFrame
    null_counts: pd.Series
    df_corr: pd.DataFrame
    df_strong_corrs: pd.DataFrame
    df_long: pd.DataFrame
    df_score_summary: pd.DataFrame
    df_borough_avgs: t.Optional[pd.DataFrame] = None
    figures: dict[str, matplotlib.figure.Figure] = dataclasses.field(
        default_factory=dict
    )


def load_datasets(
    cfg: SurveyProjectConfig,
) -> tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    """
    Load raw school, general-education survey, and District 75 survey datasets
    as specified in ``cfg`` .
    """
    df_school = dataio.read_school_data(
        cfg.datasets.school.file_path,
        schema=(
            dataio.schemas.RawSchoolDataSchema
            if cfg.datasets.school.validate_schema
            else None
        ),
        **_get_read_kwargs(cfg.datasets.school),
    )
    df_survey_gened, df_survey_d75 = (
        dataio.read_survey_data(
            ds_cfg.file_path,
            schema=(
                dataio.schemas.RawSurveyDataSchema if ds_cfg.validate_schema else None
            ),
            **_get_read_kwargs(ds_cfg),
        )
        for ds_cfg in (cfg.datasets.survey_gened, cfg.datasets.survey_d75)
    )
    return (df_school, df_survey_gened, df_survey_d75)


def run_survey_analysis(
    cfg: SurveyProjectConfig, *, make_plots: bool = True
) -> SurveyAnalysisResults:
    """
    Run the full survey analysis described by ``cfg`` , top to bottom:
    load, clean, combine, correlate, reshape, and (optionally) plot.
    If ``cfg.plotting.output_dir`` is set, figures are also saved to disk.
    """
    df_school, df_survey_gened, df_survey_d75 = load_datasets(cfg)
    df_combined = survey.make_combined_survey_dataset(
        df_survey_gened,
        df_survey_d75,
        df_school,
        school_type=cfg.preprocessing.school_type,
        school_type_col=cfg.preprocessing.school_type_col,
        id_col=cfg.id_col,
        id_cols=cfg.preprocessing.id_cols,
        patterns=cfg.preprocessing.score_col_patterns,
    )
    null_counts = eda.compute_null_counts(df_combined)
    LOGGER.info(
        "%s of %s rows in combined dataset have null '%s'",
        null_counts.get(cfg.correlation.ref_col, 0),
        len(df_combined),
        cfg.correlation.ref_col,
    )

    corr_cols = list(
        utils.unique_elements_in_order(
            [cfg.correlation.ref_col]
            + eda.select_column_range(
                df_combined,
                cfg.correlation.score_cols_start,
                cfg.correlation.score_cols_end,
            )
        )
    )
    df_corr = eda.compute_pairwise_correlations(
        df_combined, corr_cols, method=cfg.correlation.method
    )
    df_strong_corrs = eda.filter_strong_correlations(
        eda.to_long_correlations(df_corr, cfg.correlation.ref_col),
        threshold=cfg.correlation.threshold,
    )

    df_long = reshape.melt_survey_scores(
        df_combined,
        id_cols=[col for col in cfg.preprocessing.id_cols if col in df_combined.columns],
        include_total=cfg.preprocessing.include_total_in_long,
    )
    df_score_summary = reshape.summarize_scores_by_response_type(df_long)
    df_borough_avgs = (
        eda.compute_borough_averages(df_combined, group_col=cfg.borough_col)
        if cfg.borough_col in df_combined.columns
        else None
    )

    results = SurveyAnalysisResults(
        df_combined=df_combined,
        null_counts=null_counts,
        df_corr=df_corr,
        df_strong_corrs=df_strong_corrs,
        df_long=df_long,
        df_score_summary=df_score_summary,
        df_borough_avgs=df_borough_avgs,
    )
    if make_plots:
        results.figures = make_figures(results, cfg)
        if cfg.plotting.output_dir is not None:
            save_figures(results.figures, cfg)
    return results


def make_figures(
    results: SurveyAnalysisResults, cfg: SurveyProjectConfig
) -> dict[str, matplotlib.figure.Figure]:
    """Make all figures for ``results`` , keyed by a file-friendly name."""
    ref_col = cfg.correlation.ref_col
    # skip the reference column's trivial self-correlation
    x_cols = [
        var for var in results.df_strong_corrs["variable"].tolist() if var != ref_col
    ]
    coefficients = results.df_strong_corrs.set_index("variable")["coefficient"]
    scatter_figs = plotting.plot_correlation_scatters(
        results.df_combined,
        x_cols,
        ref_col,
        coefficients=coefficients,
        alpha=cfg.plotting.scatter_alpha,
    )
    figures = {
        f"scatter_{x_col}_{ref_col}": fig
        for x_col, fig in zip(x_cols, scatter_figs)
    }
    figures["correlation_heatmap"] = plotting.plot_correlation_heatmap(results.df_corr)
    figures["score_boxplots"] = plotting.plot_score_boxplots(results.df_long)
    figures["score_ridgelines"] = plotting.plot_score_ridgelines(results.df_long)
    return figures


def save_figures(
    figures: dict[str, matplotlib.figure.Figure], cfg: SurveyProjectConfig
) -> list[pathlib.Path]:
    """Save ``figures`` to the output directory given in ``cfg`` ."""
    if cfg.plotting.output_dir is None:
        raise ValueError("plotting.output_dir must be set to save figures")
    output_dir = pathlib.Path(cfg.plotting.output_dir) / cfg.project_id
    return [
        plotting.save_figure(
            fig, output_dir / f"{name}.{cfg.plotting.file_format}", dpi=cfg.plotting.dpi
        )
        for name, fig in figures.items()
    ]


def _get_read_kwargs(ds_cfg: DatasetIOConfig) -> dict[str, object]:
    return {"encoding": ds_cfg.encoding} if ds_cfg.encoding is not None else {}
