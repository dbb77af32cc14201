try:
    import tomllib  # noqa
except ImportError:  # => PY3.10
    import tomli as tomllib  # noqa

import pathlib

import pydantic as pyd
import pytest

from school_survey_tool import configs
from school_survey_tool.configs import survey

SRC_ROOT = pathlib.Path(__file__).parents[2] / "pipelines" / "survey"


def test_template_survey_cfg():
    cfg = configs.load_config(
        SRC_ROOT / "config-TEMPLATE.toml", configs.SurveyProjectConfig
    )
    assert isinstance(cfg, configs.SurveyProjectConfig)
    assert cfg.datasets.survey_d75.encoding == "windows-1252"
    assert cfg.correlation.ref_col == "avg_sat_score"


def test_minimal_survey_cfg_defaults():
    cfg = survey.SurveyProjectConfig.model_validate(
        tomllib.loads(
            """
            project_id = "nyc_2011"

            [datasets]
            school = { file_path = "combined.csv" }
            survey_gened = { file_path = "gened.txt" }
            survey_d75 = { file_path = "d75.txt" }
            """
        )
    )
    assert cfg.id_col == "dbn"
    assert cfg.preprocessing.school_type == "High School"
    assert cfg.preprocessing.include_total_in_long is False
    assert cfg.correlation.threshold == 0.25
    assert cfg.correlation.method == "pearson"
    assert cfg.plotting.output_dir is None
    assert cfg.datasets.school.encoding is None
    assert cfg.datasets.school.validate_schema is True


@pytest.mark.parametrize(
    "cfg_str",
    [
        'project_id = "nyc_2011"',
        """
        project_id = "NYC 2011!"
        [datasets]
        school = { file_path = "combined.csv" }
        survey_gened = { file_path = "gened.txt" }
        survey_d75 = { file_path = "d75.txt" }
        """,
        """
        project_id = "nyc_2011"
        [datasets]
        school = { file_path = "combined.csv" }
        survey_gened = { file_path = "gened.txt" }
        survey_d75 = { file_path = "d75.txt" }
        [correlation]
        threshold = 1.5
        """,
        """
        project_id = "nyc_2011"
        [datasets]
        school = { file_path = "combined.csv" }
        survey_gened = { file_path = "gened.txt" }
        survey_d75 = { file_path = "d75.txt" }
        [correlation]
        method = "cosine"
        """,
        """
        project_id = "nyc_2011"
        [datasets]
        school = { file_path = "combined.csv" }
        survey_gened = { file_path = "gened.txt" }
        survey_d75 = { file_path = "d75.txt" }
        [preprocessing]
        score_col_patterns = []
        """,
        """
        project_id = "nyc_2011"
        foo = "bar"
        [datasets]
        school = { file_path = "combined.csv" }
        survey_gened = { file_path = "gened.txt" }
        survey_d75 = { file_path = "d75.txt" }
        """,
    ],
)
def test_bad_survey_cfgs(cfg_str):
    cfg = tomllib.loads(cfg_str)
    with pytest.raises(pyd.ValidationError):
        _ = survey.SurveyProjectConfig.model_validate(cfg)
