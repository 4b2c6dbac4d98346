
from .metrics import regression_metrics
from .cv import cross_validate
from .reporting import summarize_folds, save_cv_outputs, save_predictions
