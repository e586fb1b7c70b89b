from .mapper import *  # NOQA
