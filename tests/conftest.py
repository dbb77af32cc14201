import matplotlib
import matplotlib.pyplot as plt
import pandas as pd
import pytest

# render figures off-screen, no display needed
matplotlib.use("Agg")

SCORE_COLS = [
    f"{metric}_{resp}_11"
    for resp in ("p", "t", "s", "tot")
    for metric in ("saf", "com", "eng", "aca")
]


def make_survey_data(dbns, school_type="High School", seed=0):
    """Make a small raw survey dataset, with deterministic scores per school."""
    data = {
        "dbn": list(dbns),
        "schoolname": [f"School {dbn}" for dbn in dbns],
        "schooltype": [school_type] * len(dbns),
    }
    for j, col in enumerate(SCORE_COLS):
        data[col] = [
            round(5.0 + ((seed + 3 * i + 7 * j) % 9) * 0.5, 1)
            for i in range(len(dbns))
        ]
    # extra per-question columns, as in the raw files
    data["nr_s"] = [100] * len(dbns)
    return pd.DataFrame(data)


@pytest.fixture
def make_survey():
    return make_survey_data


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")
