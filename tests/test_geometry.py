"""Tests for the grid geometry module."""

from wyrm.geometry import GridGeometry, grid_dimensions


class TestGridDimensions:
    def test_exact_fit(self):
        assert grid_dimensions(400, 400, 20) == (20, 20)

    def test_floors_partial_cells(self):
        assert grid_dimensions(419, 205, 20) == (20, 10)

    def test_surface_smaller_than_cell(self):
        assert grid_dimensions(10, 10, 20) == (0, 0)


class TestGridGeometry:
    def test_from_surface(self):
        geometry = GridGeometry.from_surface(300, 200, 20)
        assert geometry.width == 15
        assert geometry.height == 10
        assert geometry.cell_size == 20
        assert geometry.cell_count == 150

    def test_pixel_size_covers_whole_cells(self):
        geometry = GridGeometry.from_surface(410, 395, 20)
        assert geometry.pixel_size == (400, 380)

    def test_in_bounds(self):
        geometry = GridGeometry(5, 4)
        assert geometry.in_bounds((0, 0))
        assert geometry.in_bounds((4, 3))
        assert not geometry.in_bounds((-1, 0))
        assert not geometry.in_bounds((0, -1))
        assert not geometry.in_bounds((5, 0))
        assert not geometry.in_bounds((0, 4))

    def test_cell_origin(self):
        geometry = GridGeometry(10, 10, cell_size=16)
        assert geometry.cell_origin((0, 0)) == (0, 0)
        assert geometry.cell_origin((3, 2)) == (48, 32)
