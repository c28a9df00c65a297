# -*- coding: utf-8 -*-
"""
Mobile Asset Export Core Module
Logging, results, configuration and service construction
"""

from . import log
from . import result
from . import config_manager

__all__ = [
    "log",
    "result",
    "config_manager",
]
