__author__ = "Flask-DetailView contributors"
__version__ = "1.0.0"

from .attributes import AttributeSpec, Deferred, UNSET, normalize_attributes  # noqa: F401
from .config import DetailViewConfig, load_config  # noqa: F401
from .const import InputType  # noqa: F401
from .exceptions import ConfigurationError, DetailViewError  # noqa: F401
from .formatter import Formatter  # noqa: F401
from .forms import ActiveField, ActiveForm  # noqa: F401
from .manager import DetailViewManager  # noqa: F401
from .registry import default_registry, InputWidgetRegistry  # noqa: F401
from .responses import delete_response  # noqa: F401
from .widgets import detail_view, DetailView  # noqa: F401
