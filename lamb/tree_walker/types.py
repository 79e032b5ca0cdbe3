"""
This module aims to express an interface agreement
between the evaluator and various kinds of data.
"""

from abc import ABC
from typing import Union
from ..scope import Scope

class LambValue(ABC):
	""" Root for classes that implement specialized run-time data structures """

# Integers and booleans play themselves.
VALUE = Union[int, bool, LambValue]
ENV = Scope[VALUE]
