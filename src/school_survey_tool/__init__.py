from . import configs, dataio, eda, pipeline, plotting, preprocessing, reshape, utils
