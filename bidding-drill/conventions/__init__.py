"""
Convention definitions
Each module builds one convention's rule tree (or, for SAYC, its rule list)
and config at import time.
"""

from registry import ConventionRegistry

from .bergen_raises import bergen_config
from .dont import dont_config
from .gerber import gerber_config
from .landy import landy_config
from .sayc import sayc_config
from .stayman import stayman_config

ALL_CONVENTIONS = [stayman_config, gerber_config, bergen_config, dont_config, landy_config, sayc_config]


def build_registry():
    """A fresh registry holding every built-in convention"""
    return ConventionRegistry(ALL_CONVENTIONS)


__all__ = [
    'ALL_CONVENTIONS',
    'bergen_config',
    'build_registry',
    'dont_config',
    'gerber_config',
    'landy_config',
    'sayc_config',
    'stayman_config',
]
