"""Split large files into checksummed fragments and merge them back."""

from filesplit.core import *  # noqa: F401,F403
from filesplit.core import __all__

__version__ = "0.1.0"
