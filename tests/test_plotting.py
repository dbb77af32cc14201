import matplotlib.figure
import matplotlib.pyplot as plt
import pandas as pd
import pytest

from school_survey_tool import plotting, reshape


@pytest.fixture
def df_wide(make_survey):
    dbns = [f"01M{i:03d}" for i in range(12)]
    return make_survey(dbns).assign(
        avg_sat_score=[1100.0 + 25 * i for i in range(len(dbns))]
    )


@pytest.fixture
def df_long(df_wide):
    return reshape.melt_survey_scores(df_wide, id_cols=["dbn"])


def test_plot_correlation_scatter(df_wide):
    obs = plotting.plot_correlation_scatter(
        df_wide, "saf_t_11", "avg_sat_score", coefficient=0.123456789
    )
    assert isinstance(obs, matplotlib.figure.Figure)
    ax = obs.axes[0]
    assert ax.get_title() == "r = 0.123457"
    assert "avg_sat_score" in obs.texts[0].get_text()
    assert "saf_t_11" in obs.texts[0].get_text()
    # the trend line has no confidence band
    assert len(ax.lines) == 1
    assert len(ax.collections) == 1


def test_plot_correlation_scatter_computed_coefficient(df_wide):
    df = df_wide.assign(saf_t_11=lambda df: df["avg_sat_score"] / 200.0)
    obs = plotting.plot_correlation_scatter(df, "saf_t_11", "avg_sat_score")
    assert obs.axes[0].get_title() == "r = 1"


def test_plot_correlation_scatter_with_nulls(df_wide):
    df = df_wide.astype({"avg_sat_score": "Float64"})
    df.loc[:3, "avg_sat_score"] = pd.NA
    obs = plotting.plot_correlation_scatter(df, "saf_t_11", "avg_sat_score")
    assert isinstance(obs, matplotlib.figure.Figure)


def test_plot_correlation_scatter_ax(df_wide):
    fig, ax = plt.subplots()
    obs = plotting.plot_correlation_scatter(
        df_wide, "saf_t_11", "avg_sat_score", coefficient=0.5, ax=ax
    )
    assert obs is fig


def test_plot_correlation_scatters(df_wide):
    x_cols = ["saf_t_11", "saf_s_11", "saf_p_11"]
    obs = plotting.plot_correlation_scatters(
        df_wide,
        x_cols,
        "avg_sat_score",
        coefficients=pd.Series({"saf_t_11": 0.3, "saf_s_11": -0.4}),
    )
    assert len(obs) == len(x_cols)
    assert all(isinstance(fig, matplotlib.figure.Figure) for fig in obs)
    assert obs[0].axes[0].get_title() == "r = 0.3"
    assert obs[1].axes[0].get_title() == "r = -0.4"


def test_plot_score_boxplots(df_long):
    obs = plotting.plot_score_boxplots(df_long)
    assert isinstance(obs, matplotlib.figure.Figure)
    legend = obs.axes[0].get_legend()
    assert [text.get_text() for text in legend.get_texts()] == [
        "teacher",
        "student",
        "parent",
    ]


def test_plot_score_ridgelines(df_long):
    obs = plotting.plot_score_ridgelines(df_long)
    assert isinstance(obs, matplotlib.figure.Figure)
    # one ridge per survey metric
    assert len(obs.axes) == 4


def test_plot_correlation_heatmap(df_wide):
    df_corr = df_wide.loc[:, ["avg_sat_score", "saf_t_11", "saf_s_11"]].corr()
    obs = plotting.plot_correlation_heatmap(df_corr)
    assert isinstance(obs, matplotlib.figure.Figure)


@pytest.mark.parametrize("file_name", ["fig.png", "nested/dir/fig.svg"])
def test_save_figure(tmp_path, file_name):
    fig, ax = plt.subplots()
    ax.plot([1, 2, 3], [3, 2, 1])
    obs = plotting.save_figure(fig, tmp_path / file_name, dpi=50)
    assert obs == tmp_path / file_name
    assert obs.exists()
    assert obs.stat().st_size > 0
    assert not plt.fignum_exists(fig.number)
