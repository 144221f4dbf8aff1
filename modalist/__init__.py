__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'modalist'
__author__ = 'Eiko Reishin (影皇嶺臣)'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .context import *
from .faults import *
from .invokers import *
from .mixins import *
from .params import *
from .presentation import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the context stores
__all__ += context.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the invokers
__all__ += invokers.__all__  # type: ignore[attr-defined]
# Load the exposed API of the mixins
__all__ += mixins.__all__  # type: ignore[attr-defined]
# Load the exposed API of the parameter normalizer
__all__ += params.__all__  # type: ignore[attr-defined]
# Load the exposed API of the presentation layer
__all__ += presentation.__all__  # type: ignore[attr-defined]
