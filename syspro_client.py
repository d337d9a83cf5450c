# syspro_client.py
"""
SYSPRO client object core - Main package module
"""
import logging

from utils.constants import LOG_FORMAT, LOG_DATE_FORMAT

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    datefmt=LOG_DATE_FORMAT
)

# Import main components to expose them at package level
from domain.core.syspro_object import (
    OBJECT_CLASSES,
    SysproObject,
    convert_to_syspro_object,
    deep_copy,
    register_object,
    to_plain,
)
from utils.options import OPTS_COPYABLE, RequestOptions, normalize_opts

__version__ = "0.1.0"

# Make them available when someone does 'import syspro_client'
__all__ = [
    'SysproObject',
    'OBJECT_CLASSES',
    'register_object',
    'convert_to_syspro_object',
    'deep_copy',
    'to_plain',
    'RequestOptions',
    'normalize_opts',
    'OPTS_COPYABLE',
]
