from .base import *  # NOQA
from .api_client import *  # NOQA
from .models import *  # NOQA
from .resources import *  # NOQA
from .settings import *  # NOQA
from .client import DtrackClient  # NOQA

# fmt: off
__version__ = '0.1.0.dev0'
# fmt: on
