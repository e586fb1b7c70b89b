from .application import *  # NOQA
from .domain import *  # NOQA
from .infrastructure import *  # NOQA
