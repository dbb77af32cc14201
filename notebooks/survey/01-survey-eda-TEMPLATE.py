# Databricks notebook source
# MAGIC %md
# MAGIC # NYC School Survey EDA: 2011
# MAGIC
# MAGIC Do student, teacher, and parent perceptions of NYC school quality line up with each other, and with academic outcomes? Load the 2011 NYC school survey data (general-education and District 75), join it with school demographic/academic data, find survey scores correlated with average SAT score, and compare score distributions across respondent types.
# MAGIC
# MAGIC ### References
# MAGIC
# MAGIC - [NYC School Survey](https://data.cityofnewyork.us/Education/2011-NYC-School-Survey/mnz3-dyi8)
# MAGIC - [pandas `DataFrame.corr()`](https://pandas.pydata.org/docs/reference/api/pandas.DataFrame.corr.html)
# MAGIC - [seaborn ridge plot example](https://seaborn.pydata.org/examples/kde_ridgeplot.html)

# COMMAND ----------

# MAGIC %md
# MAGIC # setup

# COMMAND ----------

# install dependencies, most of which should come through our 1st-party package
# %pip install -e ../..

# COMMAND ----------

import logging

import matplotlib.pyplot as plt
import missingno as msno
import seaborn as sb

from school_survey_tool import configs, dataio, eda, pipeline, plotting, reshape
from school_survey_tool.preprocessing import survey

# COMMAND ----------

logging.basicConfig(level=logging.INFO)
logging.getLogger("matplotlib").setLevel(logging.WARNING)

# COMMAND ----------

# TODO: copy the config template and point its file paths at your local data
cfg = configs.load_config(
    "../../pipelines/survey/config-TEMPLATE.toml", configs.SurveyProjectConfig
)
cfg

# COMMAND ----------

# MAGIC %md
# MAGIC # read and validate raw data

# COMMAND ----------

# read without any schema validation, so we can look at the data "raw"
df_school_raw = dataio.read_school_data(
    cfg.datasets.school.file_path, schema=None, encoding=cfg.datasets.school.encoding
)
print(f"rows x cols = {df_school_raw.shape}")
df_school_raw.head()

# COMMAND ----------

# parse+validate (or not) and decode each dataset as configured
df_school, df_survey_gened, df_survey_d75 = pipeline.load_datasets(cfg)
eda.assess_unique_values(df_school, cfg.id_col)

# COMMAND ----------

print(f"gened rows x cols = {df_survey_gened.shape}")
print(f"d75 rows x cols = {df_survey_d75.shape}")

# COMMAND ----------

eda.compute_group_counts_pcts(df_survey_gened, cfg.preprocessing.school_type_col)

# COMMAND ----------

# MAGIC %md
# MAGIC Quick checks:
# MAGIC - [ ] data exists where it should
# MAGIC - [ ] rows and columns are (roughly) as expected
# MAGIC - [ ] school ids are unique in the school dataset

# COMMAND ----------

# MAGIC %md
# MAGIC # clean and combine

# COMMAND ----------

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
print(f"rows x cols = {df_combined.shape}")
df_combined.head()

# COMMAND ----------

# survey rows without a matching school show up as nulls in all school columns
eda.compute_null_counts(df_combined).sort_values(ascending=False).head(20)

# COMMAND ----------

_ = msno.matrix(
    df_combined.sort_values(by="avg_sat_score", ignore_index=True),
    sparkline=False,
    labels=True,
)

# COMMAND ----------

eda.compute_summary_stats(df_combined, include="number")

# COMMAND ----------

# MAGIC %md
# MAGIC # survey scores vs. SAT scores

# COMMAND ----------

corr_cols = [cfg.correlation.ref_col] + eda.select_column_range(
    df_combined, cfg.correlation.score_cols_start, cfg.correlation.score_cols_end
)
df_corr = eda.compute_pairwise_correlations(
    df_combined, corr_cols, method=cfg.correlation.method
)
_ = plotting.plot_correlation_heatmap(df_corr)

# COMMAND ----------

df_strong_corrs = eda.compute_strong_correlations(
    df_combined,
    cfg.correlation.ref_col,
    corr_cols,
    threshold=cfg.correlation.threshold,
    method=cfg.correlation.method,
)
df_strong_corrs

# COMMAND ----------

# first row is the reference column's correlation with itself, so skip it
x_cols = df_strong_corrs["variable"].iloc[1:].tolist()
figs = plotting.plot_correlation_scatters(
    df_combined,
    x_cols,
    cfg.correlation.ref_col,
    coefficients=df_strong_corrs.set_index("variable")["coefficient"],
    alpha=cfg.plotting.scatter_alpha,
)

# COMMAND ----------

# MAGIC %md
# MAGIC ### takeaways / questions
# MAGIC
# MAGIC - ...

# COMMAND ----------

# MAGIC %md
# MAGIC # respondent types

# COMMAND ----------

df_long = reshape.melt_survey_scores(
    df_combined,
    id_cols=cfg.preprocessing.id_cols,
    include_total=cfg.preprocessing.include_total_in_long,
)
df_long.head()

# COMMAND ----------

reshape.summarize_scores_by_response_type(df_long)

# COMMAND ----------

_ = plotting.plot_score_boxplots(df_long)

# COMMAND ----------

_ = plotting.plot_score_ridgelines(df_long)

# COMMAND ----------

# same thing, only split out by individual survey question
ax = sb.violinplot(
    df_long, x="survey_question", y="score", hue="response_type", cut=0, inner=None
)
_ = ax.set(xlabel="Survey Question", ylabel="Score")
plt.xticks(rotation=45, ha="right")

# COMMAND ----------

# MAGIC %md
# MAGIC # boroughs

# COMMAND ----------

eda.compute_borough_averages(df_combined, group_col=cfg.borough_col)

# COMMAND ----------

# MAGIC %md
# MAGIC ### takeaways / questions
# MAGIC
# MAGIC - ...
