"""fieldcalc.

Column reducers and field display value resolution for tabular data.
"""

__version__ = "0.1.0"

from fieldcalc.core.models.base import Result

__all__ = [
    "Result",
    "__version__",
]
