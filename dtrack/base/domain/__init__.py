# (c) Nelen & Schuurmans

from .cancellation import *  # NOQA
from .exceptions import *  # NOQA
from .filter import *  # NOQA
from .pagination import *  # NOQA
from .types import *  # NOQA
from .value_object import *  # NOQA
