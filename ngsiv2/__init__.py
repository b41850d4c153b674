"""NGSIv2 context entity model and document codec."""

from ngsiv2.models import *  # noqa: F403
from ngsiv2.models import __all__ as _models_all

__version__ = "0.1.0"

__all__ = [*_models_all, "__version__"]
