# Import all builtin checks to register them
from konstrain.checks.builtin.dtype import DataTypeCheck
from konstrain.checks.builtin.not_null import NotNullCheck
from konstrain.checks.builtin.unique import UniqueCheck
from konstrain.checks.builtin.length import MaxLengthCheck, MinLengthCheck
from konstrain.checks.builtin.range import MaxValueCheck, MinValueCheck
from konstrain.checks.builtin.allowed_values import AllowedValuesCheck

__all__ = [
    "DataTypeCheck",
    "NotNullCheck",
    "UniqueCheck",
    "MinLengthCheck",
    "MaxLengthCheck",
    "MinValueCheck",
    "MaxValueCheck",
    "AllowedValuesCheck",
]
