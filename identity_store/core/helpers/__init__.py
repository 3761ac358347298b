from .cancellation import CancellationToken, throw_if_cancelled
from .error_policy import ErrorPolicy
from .filter_helper import apply_filters_and_sorting
from .flatten import ROLE_DELIMITER, flatten_values, split_flattened

__all__ = [
    "CancellationToken",
    "ErrorPolicy",
    "ROLE_DELIMITER",
    "apply_filters_and_sorting",
    "flatten_values",
    "split_flattened",
    "throw_if_cancelled",
]
