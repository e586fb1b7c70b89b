from .component import *  # NOQA
from .finding import *  # NOQA
from .project import *  # NOQA
