from .fetch_all import *  # NOQA
