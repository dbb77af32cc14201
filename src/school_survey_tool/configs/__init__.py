from .load import load_config
from .survey import SurveyProjectConfig
