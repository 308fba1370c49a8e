"""
Integration tests reading real DXF files written with ezdxf.
"""

import pytest
from fisnar.paths import Circle, Line, Polyline, UnsupportedEntity, extract_paths
from fisnar.paths.dxf_source import read_entities
from fisnar.utils.errors import DrawingError
from fisnar.utils.geometry import Point3

P = Point3


@pytest.mark.integration
class TestReadEntities:
    def test_line(self, write_dxf):
        path = write_dxf(lambda msp: msp.add_line((0, 0, 1), (10, 5, 1)))
        assert read_entities(path) == [Line(P(0, 0, 1), P(10, 5, 1))]

    def test_circle_with_default_extrusion(self, write_dxf):
        path = write_dxf(lambda msp: msp.add_circle((20, 20, 0), radius=2))
        (circle,) = read_entities(path)
        assert isinstance(circle, Circle)
        assert circle.center == P(20, 20, 0)
        assert circle.radius == 2.0
        assert circle.extrusion == P(0, 0, 1)

    def test_circle_extrusion_is_kept(self, write_dxf):
        path = write_dxf(
            lambda msp: msp.add_circle((1, 2, 3), radius=4, dxfattribs={"extrusion": (0, 0, -1)})
        )
        (circle,) = read_entities(path)
        assert circle.extrusion == P(0, 0, -1)

    def test_polyline3d(self, write_dxf):
        verts = [(0, 0, 0), (5, 0, 1), (5, 5, 2)]
        path = write_dxf(lambda msp: msp.add_polyline3d(verts))
        assert read_entities(path) == [Polyline(tuple(P(*v) for v in verts))]

    def test_lwpolyline_uses_elevation(self, write_dxf):
        path = write_dxf(
            lambda msp: msp.add_lwpolyline([(0, 0), (3, 0), (3, 4)], dxfattribs={"elevation": 2.5})
        )
        assert read_entities(path) == [Polyline((P(0, 0, 2.5), P(3, 0, 2.5), P(3, 4, 2.5)))]

    def test_unsupported_entities_keep_kind(self, write_dxf):
        def build(msp):
            msp.add_text("hello")
            msp.add_point((1, 1))
            msp.add_line((0, 0), (1, 0))

        entities = read_entities(write_dxf(build))
        assert [type(e) for e in entities] == [UnsupportedEntity, UnsupportedEntity, Line]
        assert [e.kind for e in entities[:2]] == ["TEXT", "POINT"]
        assert all(e.handle for e in entities[:2])

    def test_document_order(self, write_dxf):
        def build(msp):
            msp.add_circle((0, 0), radius=1)
            msp.add_line((0, 0), (1, 0))
            msp.add_polyline3d([(0, 0, 0), (1, 1, 1)])

        kinds = [type(e) for e in read_entities(write_dxf(build))]
        assert kinds == [Circle, Line, Polyline]

    def test_extract_from_file(self, write_dxf):
        def build(msp):
            msp.add_line((0, 0), (10, 0))
            msp.add_line((10, 0), (10, 10))
            msp.add_line((10, 10), (0, 10))

        paths = extract_paths(read_entities(write_dxf(build)))
        assert paths == [
            (P(0, 0, 0), P(10, 0, 0)),
            (P(10, 0, 0), P(10, 10, 0), P(0, 10, 0)),
        ]


@pytest.mark.integration
class TestDrawingErrors:
    def test_missing_file(self, tmp_path):
        missing = str(tmp_path / "nope.dxf")
        with pytest.raises(DrawingError) as exc:
            read_entities(missing)
        assert exc.value.filename == missing
        assert "nope.dxf" in str(exc.value)

    def test_not_a_dxf(self, tmp_path):
        junk = tmp_path / "junk.dxf"
        junk.write_text("this is not a drawing\n")
        with pytest.raises(DrawingError):
            read_entities(str(junk))

    def test_drawing_error_is_an_os_error(self, tmp_path):
        with pytest.raises(OSError):
            read_entities(str(tmp_path / "nope.dxf"))
