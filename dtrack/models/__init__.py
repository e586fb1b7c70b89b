from .component import *  # NOQA
from .entity import *  # NOQA
from .finding import *  # NOQA
from .project import *  # NOQA
