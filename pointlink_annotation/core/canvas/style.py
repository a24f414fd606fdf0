from dataclasses import dataclass
from typing import Tuple, Union

Color = Union[str, Tuple[int, int, int]]


@dataclass(frozen=True)
class RenderStyle:
    """Fixed marker and stroke settings for rendered annotations."""

    point_radius: float = 5
    point_color: Color = "red"
    edge_width: float = 3
    edge_color: Color = "blue"

    @classmethod
    def from_config(cls, cfg):
        """Create from the ``style`` section of the configuration."""
        return cls(
            point_radius=cfg.point_radius,
            point_color=cfg.point_color,
            edge_width=cfg.edge_width,
            edge_color=cfg.edge_color,
        )
