import logging
import pathlib
import typing as t
from collections.abc import Sequence

import matplotlib.figure
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

LOGGER = logging.getLogger(__name__)

PALETTE = sns.color_palette("Paired")
RESPONSE_TYPE_ORDER = ["teacher", "student", "parent", "total", "NA"]


def plot_correlation_scatter(
    df: pd.DataFrame,
    x: str,
    y: str,
    *,
    coefficient: t.Optional[float] = None,
    alpha: float = 0.3,
    ax: t.Optional[plt.Axes] = None,
) -> matplotlib.figure.Figure:
    """
    Plot a scatter of ``y`` vs. ``x`` with an ordinary least-squares trend line
    (no confidence band), titled by both variable names and their correlation.

    Args:
        df
        x: Column plotted on the x axis.
        y: Column plotted on the y axis.
        coefficient: Precomputed correlation between ``x`` and ``y`` ;
            if None, it's computed from pairwise-complete rows of ``df`` .
        alpha: Point transparency, to make overplotting legible.
        ax: Axes on which to draw; if None, a new figure and axes are created.
    """
    if coefficient is None:
        coefficient = df[x].astype("float64").corr(df[y].astype("float64"))
    if ax is None:
        fig, ax = plt.subplots()
    else:
        fig = ax.figure
    # regplot's numpy fitting can't handle pd.NA, so use plain floats w/o nulls
    df_xy = df.loc[:, [x, y]].astype("float64").dropna(axis="index", how="any")
    sns.regplot(
        data=df_xy,
        x=x,
        y=y,
        ci=None,
        fit_reg=len(df_xy) >= 2,
        scatter_kws={"alpha": alpha, "color": PALETTE[1]},
        line_kws={"color": PALETTE[5]},
        ax=ax,
    )
    fig.suptitle(f"{y} vs. {x}")
    ax.set_title(f"r = {coefficient:.6g}", fontsize="medium")
    ax.set(xlabel=x, ylabel=y)
    return fig


def plot_correlation_scatters(
    df: pd.DataFrame,
    x_cols: Sequence[str],
    y: str,
    *,
    coefficients: t.Optional[pd.Series | dict[str, float]] = None,
    alpha: float = 0.3,
) -> list[matplotlib.figure.Figure]:
    """
    Plot one correlation scatter per column in ``x_cols`` against ``y`` .

    Args:
        df
        x_cols
        y
        coefficients: Precomputed correlations with ``y`` , keyed by x column.
        alpha

    See Also:
        - :func:`plot_correlation_scatter()`
    """
    coefficients = coefficients if coefficients is not None else {}
    return [
        plot_correlation_scatter(
            df, x_col, y, coefficient=coefficients.get(x_col), alpha=alpha
        )
        for x_col in x_cols
    ]


def plot_score_boxplots(
    df_long: pd.DataFrame,
    *,
    x: str = "survey_question",
    y: str = "score",
    hue: str = "response_type",
) -> matplotlib.figure.Figure:
    """
    Plot score distributions per survey question as box plots,
    colored by respondent type.

    Args:
        df_long: As output by :func:`reshape.melt_survey_scores()` .
        x
        y
        hue
    """
    hue_order = _get_hue_order(df_long[hue])
    fig, ax = plt.subplots(figsize=(12, 6))
    sns.boxplot(
        data=df_long.astype({y: "float64"}),
        x=x,
        y=y,
        hue=hue,
        hue_order=hue_order,
        palette=_get_palette(hue_order),
        dodge=False,
        ax=ax,
    )
    ax.set(xlabel="Survey Question", ylabel="Score", title="Survey Scores by Respondent")
    ax.set_xticks(ax.get_xticks())
    ax.set_xticklabels(
        ax.get_xticklabels(), rotation=45, ha="right", rotation_mode="anchor"
    )
    sns.move_legend(ax, loc="upper left", bbox_to_anchor=(1, 1), title="Respondent")
    fig.tight_layout()
    return fig


def plot_score_ridgelines(
    df_long: pd.DataFrame,
    *,
    value_col: str = "score",
    row: str = "metric",
    hue: str = "response_type",
    height: float = 1.5,
    aspect: float = 6.0,
    overlap: float = 0.25,
) -> matplotlib.figure.Figure:
    """
    Plot ridge-line density plots of scores: one row per ``row`` value
    (survey metric, by default), with overlapping densities per respondent type.

    Args:
        df_long: As output by :func:`reshape.melt_survey_scores()` .
        value_col
        row
        hue
        height: Height of each ridge, in inches.
        aspect: Ratio of each ridge's width to its height.
        overlap: Fraction of ridge height by which adjacent ridges overlap.

    References:
        - https://seaborn.pydata.org/examples/kde_ridgeplot.html
    """
    hue_order = _get_hue_order(df_long[hue])
    data = df_long.loc[df_long[value_col].notna(), :].astype({value_col: "float64"})
    grid = sns.FacetGrid(
        data,
        row=row,
        hue=hue,
        hue_order=hue_order,
        palette=_get_palette(hue_order),
        height=height,
        aspect=aspect,
    )
    grid.map_dataframe(
        sns.kdeplot, x=value_col, fill=True, alpha=0.5, linewidth=1.0, warn_singular=False
    )
    grid.refline(y=0, linewidth=1.0, linestyle="-", color="lightgrey", clip_on=False)
    grid.set_titles(template="{row_name}", loc="left")
    grid.set(yticks=[], ylabel="")
    grid.despine(left=True)
    grid.add_legend(title="Respondent")
    grid.figure.subplots_adjust(hspace=-overlap)
    grid.figure.suptitle("Score Densities by Respondent", y=1.02)
    return grid.figure


def plot_correlation_heatmap(
    df_corr: pd.DataFrame, *, vmin: float = -1.0, vmax: float = 1.0
) -> matplotlib.figure.Figure:
    """Plot a correlation matrix as a heatmap."""
    fig, ax = plt.subplots(figsize=(10, 10))
    sns.heatmap(
        df_corr.astype(np.float32),
        xticklabels=df_corr.columns,
        yticklabels=df_corr.columns,
        vmin=vmin,
        vmax=vmax,
        cmap="vlag",
        ax=ax,
    )
    _ = ax.set_xticklabels(
        ax.get_xticklabels(), rotation=45, ha="right", rotation_mode="anchor"
    )
    return fig


def save_figure(
    fig: matplotlib.figure.Figure,
    file_path: str | pathlib.Path,
    *,
    dpi: int = 150,
    close: bool = True,
) -> pathlib.Path:
    """
    Save ``fig`` to ``file_path`` on disk, creating parent directories as needed,
    and (optionally) close it to free memory.
    """
    fpath = pathlib.Path(file_path)
    fpath.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(fpath, dpi=dpi, bbox_inches="tight")
    LOGGER.info("saved figure to '%s'", fpath)
    if close:
        plt.close(fig)
    return fpath


def _get_hue_order(ser: pd.Series) -> list[str]:
    present = set(ser.dropna().unique())
    return [val for val in RESPONSE_TYPE_ORDER if val in present] + sorted(
        val for val in present if val not in RESPONSE_TYPE_ORDER
    )


def _get_palette(hue_order: list[str]) -> dict[str, t.Any]:
    return {val: PALETTE[(2 * i + 1) % len(PALETTE)] for i, val in enumerate(hue_order)}
