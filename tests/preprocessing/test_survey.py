import pandas as pd
import pytest

from school_survey_tool.preprocessing import survey


@pytest.fixture
def df_school():
    return pd.DataFrame(
        {
            "dbn": ["01M001", "01M292", "02M047"],
            "avg_sat_score": [1200.0, 1122.0, None],
            "boro": ["Manhattan", "Manhattan", "Manhattan"],
        }
    )


@pytest.mark.parametrize(
    ["school_types", "school_type", "exp_dbns"],
    [
        (
            ["High School", "Elementary School", "High School"],
            "High School",
            ["A", "C"],
        ),
        (["High School", None, "high school"], "High School", ["A"]),
        (["Middle School", "Elementary School", None], "High School", []),
    ],
)
def test_filter_school_type(school_types, school_type, exp_dbns):
    df = pd.DataFrame({"dbn": ["A", "B", "C"], "schooltype": school_types})
    obs = survey.filter_school_type(df, school_type=school_type)
    assert isinstance(obs, pd.DataFrame)
    assert obs["dbn"].tolist() == exp_dbns


def test_select_survey_columns(make_survey):
    df = make_survey(["01M001"])
    obs = survey.select_survey_columns(df)
    assert obs.columns.tolist()[:3] == ["dbn", "schoolname", "schooltype"]
    assert len(obs.columns) == 3 + 16
    assert "nr_s" not in obs.columns


@pytest.mark.parametrize(
    ["patterns", "exp_cols"],
    [
        (["_t_11"], ["dbn", "saf_t_11", "com_t_11", "eng_t_11", "aca_t_11"]),
        (["_tot_11"], ["dbn", "saf_tot_11", "com_tot_11", "eng_tot_11", "aca_tot_11"]),
        (["_xyz_11"], ["dbn"]),
    ],
)
def test_select_survey_columns_patterns(make_survey, patterns, exp_cols):
    df = make_survey(["01M001"])
    obs = survey.select_survey_columns(df, id_cols=["dbn"], patterns=patterns)
    assert obs.columns.tolist() == exp_cols


def test_select_survey_columns_missing_id_col(make_survey):
    df = make_survey(["01M001"]).drop(columns="schooltype")
    with pytest.raises(ValueError, match="schooltype"):
        _ = survey.select_survey_columns(df)


def test_clean_survey_data(make_survey):
    df = pd.concat(
        [
            make_survey(["01M001", "01M002"], school_type="High School"),
            make_survey(["01M003"], school_type="Elementary School"),
        ],
        ignore_index=True,
    )
    obs = survey.clean_survey_data(df, school_type="High School")
    assert obs["dbn"].tolist() == ["01M001", "01M002"]
    obs = survey.clean_survey_data(df, school_type=None)
    assert len(obs) == 3


def test_union_survey_data(make_survey):
    df1 = survey.select_survey_columns(make_survey(["01M001", "01M002"]))
    df2 = survey.select_survey_columns(make_survey(["75K004"]))
    # same columns, different order
    df2 = df2.loc[:, df2.columns[::-1]]
    obs = survey.union_survey_data(df1, df2)
    assert len(obs) == len(df1) + len(df2)
    assert obs.columns.tolist() == df1.columns.tolist()
    assert obs.index.tolist() == [0, 1, 2]


@pytest.mark.parametrize(
    "dfs",
    [
        (),
        (
            pd.DataFrame({"dbn": ["A"], "saf_t_11": [1.0]}),
            pd.DataFrame({"dbn": ["B"], "saf_s_11": [1.0]}),
        ),
        (
            pd.DataFrame({"dbn": ["A"], "saf_t_11": [1.0]}),
            pd.DataFrame({"dbn": ["B"]}),
        ),
    ],
)
def test_union_survey_data_misaligned(dfs):
    with pytest.raises(ValueError):
        _ = survey.union_survey_data(*dfs)


def test_join_school_data(df_school):
    df_survey = pd.DataFrame(
        {"dbn": ["01M001", "01M001", "09X999"], "saf_t_11": [8.5, 7.0, 6.0]}
    )
    obs = survey.join_school_data(df_survey, df_school)
    # survey rows are preserved, unmatched school rows dropped
    assert len(obs) == len(df_survey)
    assert obs["dbn"].tolist() == ["01M001", "01M001", "09X999"]
    assert obs["avg_sat_score"].tolist()[:2] == [1200.0, 1200.0]
    assert pd.isna(obs.loc[2, "avg_sat_score"]) and pd.isna(obs.loc[2, "boro"])
    assert "_merge" not in obs.columns


def test_join_school_data_no_matches(df_school):
    df_survey = pd.DataFrame({"dbn": ["09X999"], "saf_t_11": [6.0]})
    obs = survey.join_school_data(df_survey, df_school)
    assert len(obs) == 1
    assert obs["avg_sat_score"].isna().all()


def test_join_school_data_duplicate_school_ids(df_school):
    df_school = pd.concat([df_school, df_school.iloc[[0]]], ignore_index=True)
    df_survey = pd.DataFrame({"dbn": ["01M001"], "saf_t_11": [8.5]})
    with pytest.raises(pd.errors.MergeError):
        _ = survey.join_school_data(df_survey, df_school)


def test_make_combined_survey_dataset(make_survey, df_school):
    df_gened = pd.concat(
        [
            make_survey(["01M001", "01M292"], school_type="High School"),
            make_survey(["01M015"], school_type="Elementary School"),
        ],
        ignore_index=True,
    )
    df_d75 = make_survey(["75K004"], school_type="District 75 Special Education")
    obs = survey.make_combined_survey_dataset(df_gened, df_d75, df_school)
    assert obs["dbn"].tolist() == ["01M001", "01M292", "75K004"]
    assert obs.columns.tolist()[-2:] == ["avg_sat_score", "boro"]
    assert obs["avg_sat_score"].isna().tolist() == [False, False, True]
