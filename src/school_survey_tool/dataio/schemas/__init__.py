from .school import RawSchoolDataSchema
from .survey import RawSurveyDataSchema
