import logging

from .consts import INFO
from .datatypes import Bool, List, Map, Nil, Number, String, Value
from .errors import IqraError
from .interp import Runtime
from .system import DefaultSystemExecutor, SystemExecutor

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
