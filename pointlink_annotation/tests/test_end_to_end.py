"""
End-to-end canvas scenarios, driven through the controller like a host.
"""

import pytest

from pointlink_annotation.core.canvas import (
    CirclePrimitive,
    ImagePrimitive,
    LinePrimitive,
    Mode,
)


def edge_coords(controller):
    return [
        ((a.x, a.y), (b.x, b.y))
        for a, b in controller.session.graph.edge_segments()
    ]


class TestScenarios:
    """End-to-end canvas scenarios."""

    def test_greedy_chain(self, loaded_controller):
        """Test the chain built by three clicks."""
        for x, y in [(0, 0), (10, 0), (10, 10)]:
            loaded_controller.click(x, y)

        assert edge_coords(loaded_controller) == [
            ((0.0, 0.0), (10.0, 0.0)),
            ((10.0, 0.0), (10.0, 10.0)),
        ]

    def test_delete_middle_point_isolates_neighbors(self, loaded_controller):
        """Test deleting the middle of a chain."""
        for x, y in [(0, 0), (10, 0), (10, 10)]:
            loaded_controller.click(x, y)

        loaded_controller.delete_at(1)

        assert loaded_controller.session.graph.all_edges() == ()
        assert [(p["x"], p["y"]) for p in loaded_controller.point_list()] == [
            (0.0, 0.0),
            (10.0, 10.0),
        ]

    def test_click_through_zoom_and_pan(self, loaded_controller):
        """Test a click on a zoomed and panned view."""
        viewport = loaded_controller.session.viewport
        viewport.zoom = 2.0
        viewport.pan_x, viewport.pan_y = 5.0, 5.0

        loaded_controller.click(25, 25)

        assert loaded_controller.point_list()[0]["x"] == 10.0
        assert loaded_controller.point_list()[0]["y"] == 10.0

    def test_pan_mode_click_and_drag(self, loaded_controller):
        """Test plain clicks and drags in pan mode."""
        viewport = loaded_controller.session.viewport

        loaded_controller.toggle_pan()
        loaded_controller.click(50, 50)
        assert loaded_controller.mode is Mode.ANNOTATE
        assert len(loaded_controller.session.graph) == 0

        loaded_controller.zoom_in()
        zoom = viewport.zoom
        loaded_controller.toggle_pan()
        loaded_controller.pointer_down(50, 50)
        loaded_controller.pointer_move(62, 41)
        loaded_controller.pointer_up(62, 41)
        loaded_controller.click(62, 41)

        assert viewport.pan_offset == pytest.approx((12 / zoom, -9 / zoom))
        assert loaded_controller.mode is Mode.PAN
        assert len(loaded_controller.session.graph) == 0

    def test_full_session_render(self, loaded_controller):
        """Test the draw list of a full session."""
        loaded_controller.click(100, 100)
        loaded_controller.click(200, 100)
        loaded_controller.zoom_in()

        draw_list = loaded_controller.render()

        assert isinstance(draw_list[0], ImagePrimitive)
        assert isinstance(draw_list[1], LinePrimitive)
        assert all(isinstance(p, CirclePrimitive) for p in draw_list[2:])
        assert draw_list[1].end == pytest.approx((240.0, 120.0))

        loaded_controller.toggle_pan()
        assert len(loaded_controller.render()) == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
