"""
Default configuration for the annotation canvas.

Values can be overridden from the environment, e.g.
``POINTLINK_ZOOM__MAX=4`` sets ``cfg.zoom.max``.
"""

import copy
import os
from typing import Mapping, Optional

from easydict import EasyDict as edict

from .utils.env import load_cfg_from_env

_DEFAULTS = {
    "canvas": {"width": 800, "height": 600},
    "zoom": {"max": 3.0, "step": 0.2},
    "style": {
        "point_radius": 5,
        "point_color": "red",
        "edge_width": 3,
        "edge_color": "blue",
    },
    "display": {"decimals": 1},
}


def default_config() -> edict:
    """Fresh copy of the built-in defaults."""
    return edict(copy.deepcopy(_DEFAULTS))


def load_config(env: Optional[Mapping[str, str]] = None) -> edict:
    """
    Build the configuration tree.

    Args:
        env: Environment mapping to read overrides from (defaults to os.environ)

    Returns:
        EasyDict with the merged configuration
    """
    if env is None:
        env = os.environ
    return load_cfg_from_env(default_config(), dict(env))
