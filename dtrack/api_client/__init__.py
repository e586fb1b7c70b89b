from .api_provider import *  # NOQA
from .api_resource import *  # NOQA
from .exceptions import *  # NOQA
from .response import *  # NOQA
