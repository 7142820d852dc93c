"""Tests for the layout geometry resolver."""

import pytest
import yaml

from ergobox.core.errors import LayoutParseError
from ergobox.geometry.models import Key
from ergobox.geometry.resolver import (
    compute_bounds,
    create_geometry_resolver,
    load_layout_text,
    resolve_layout,
)
from ergobox.geometry.utils import expand_dots, parse_distance, to_number


def _zone(columns, rows, **extra):
    return {"points": {"zones": {"main": {"columns": columns, "rows": rows, **extra}}}}


def _positions(layout):
    return {key.id: (round(key.x, 4), round(key.y, 4)) for key in layout.keys}


class TestResolveZone:
    """Placement of keys inside a single zone."""

    def test_single_column_two_rows(self):
        layout = resolve_layout(
            {
                "units": {"u": 19.05},
                "points": {
                    "zones": {
                        "main": {
                            "anchor": {"shift": [0, 0]},
                            "columns": {"inner": {"key": {"spread": 19.05}}},
                            "rows": {"bottom": {}, "home": {}},
                        }
                    }
                },
            }
        )

        assert _positions(layout) == {
            "main_inner_bottom": (0.0, 0.0),
            "main_inner_home": (0.0, 19.05),
        }
        assert all(key.rot == 0 for key in layout.keys)

    def test_uniform_spread(self):
        layout = resolve_layout(
            _zone(
                {"a": {}, "b": {}, "c": {}},
                {"bottom": {}, "top": {}},
                key={"spread": 20},
            )
        )

        for key in layout.keys:
            assert key.x == pytest.approx({"a": 0, "b": 20, "c": 40}[key.col])

    def test_unit_suffixed_spread(self):
        layout = resolve_layout(
            _zone({"a": {}, "b": {"key": {}}}, {"home": {}}, key={"spread": "2u"})
        )

        assert layout.get_key("main_b_home").x == pytest.approx(38.1)

    def test_column_stagger_accumulates(self):
        layout = resolve_layout(
            _zone(
                {
                    "a": {},
                    "b": {"key": {"stagger": 5}},
                    "c": {"key": {"stagger": 2}},
                },
                {"home": {}},
            )
        )

        ys = [round(key.y, 4) for key in layout.keys]
        assert ys == [0.0, 5.0, 7.0]

    def test_global_rotation(self):
        layout = resolve_layout(
            {
                "points": {
                    "rotate": 90,
                    "zones": {"main": {"columns": {"a": {}}, "rows": {"r0": {}, "r1": {}}}},
                }
            }
        )

        upper = layout.get_key("main_a_r1")
        assert upper.x == pytest.approx(-19.05)
        assert upper.y == pytest.approx(0.0, abs=1e-9)
        assert upper.rot == 90

    def test_anchor_ref_places_second_zone(self):
        layout = resolve_layout(
            {
                "points": {
                    "zones": {
                        "main": {"columns": {"a": {}, "b": {}}, "rows": {"home": {}}},
                        "thumb": {
                            "anchor": {"ref": "main_b_home", "shift": [0, -20]},
                            "columns": {"t": {}},
                            "rows": {"home": {}},
                        },
                    }
                }
            }
        )

        thumb = layout.get_key("thumb_t_home")
        assert thumb.x == pytest.approx(19.05)
        assert thumb.y == pytest.approx(-20)
        assert thumb.zone_order == 1

    def test_splay_swings_column_around_origin(self):
        layout = resolve_layout(
            _zone(
                {"a": {}, "b": {"key": {"splay": 90, "origin": [0, -10]}}},
                {"home": {}, "top": {}},
            )
        )

        assert _positions(layout) == {
            "main_a_home": (0.0, 0.0),
            "main_a_top": (0.0, 19.05),
            "main_b_home": (10.0, 9.05),
            "main_b_top": (-9.05, 9.05),
        }
        assert layout.get_key("main_a_home").rot == 0
        assert layout.get_key("main_b_top").rot == 90

    def test_anchor_ref_to_rotated_key_does_not_rotate_twice(self):
        layout = resolve_layout(
            {
                "points": {
                    "rotate": 90,
                    "zones": {
                        "main": {"columns": {"a": {}, "b": {}}, "rows": {"home": {}}},
                        "thumb": {
                            "anchor": {"ref": "main_b_home", "shift": [10, 0]},
                            "columns": {"t": {}},
                            "rows": {"home": {}, "top": {}},
                        },
                    },
                }
            }
        )

        ref = layout.get_key("main_b_home")
        assert (ref.x, ref.y) == (pytest.approx(0.0, abs=1e-9), pytest.approx(19.05))
        assert _positions(layout)["thumb_t_home"] == (0.0, 29.05)
        assert _positions(layout)["thumb_t_top"] == (-19.05, 29.05)
        assert layout.get_key("thumb_t_home").rot == 90
        assert layout.get_key("thumb_t_top").rot == 90

    def test_missing_anchor_ref_warns(self):
        layout = resolve_layout(
            _zone({"a": {}}, {"home": {}}, anchor={"ref": "nowhere"})
        )

        assert "Anchor ref nowhere not found for zone main" in layout.warnings
        assert layout.get_key("main_a_home").x == 0

    def test_skipped_position(self):
        layout = resolve_layout(
            _zone(
                {"a": {"rows": {"bottom": {"skip": True}}}, "b": {}},
                {"bottom": {}, "home": {}},
            )
        )

        assert layout.get_key("main_a_bottom").skip is True
        assert [key.id for key in layout.visible_keys] == [
            "main_a_home",
            "main_b_bottom",
            "main_b_home",
        ]
        assert len(layout.export_keys(include_skipped=True)) == 4

    def test_dotted_keys_are_expanded(self):
        document = yaml.safe_load(
            """
points.zones.main:
  columns:
    a: {}
  rows:
    home: {}
"""
        )

        layout = resolve_layout(document)

        assert [key.id for key in layout.keys] == ["main_a_home"]


class TestMatrix:
    """Rows, columns, pin map and net warnings."""

    def test_matrix_from_single_column(self, single_column_project):
        matrix = single_column_project.parsed.matrix

        assert [row.name for row in matrix.rows] == ["bottom", "home"]
        assert [col.net for col in matrix.cols] == ["C0"]
        assert matrix.pin_for("R1") == "P1"
        assert matrix.pin_for("XX") == ""
        assert matrix.mirrored is False
        assert single_column_project.parsed.warnings == []

    def test_missing_nets_warn(self):
        layout = resolve_layout(
            _zone({"a": {"key": {"column_net": "C9"}}}, {"home": {}})
        )

        assert "Row home is missing row_net" in layout.warnings
        assert "Column net C9 has no MCU pin mapping" in layout.warnings

    def test_indices_follow_declaration_order(self, single_column_project):
        keys = single_column_project.parsed.keys

        assert [(key.row_index, key.col_index) for key in keys] == [(0, 0), (1, 0)]


class TestMirror:
    """Mirrored halves of split layouts."""

    def test_mirror_formula(self, split_project):
        layout = split_project.parsed
        axis_x = layout.get_key("main_inner_bottom").x + 40 / 2

        for key in layout.keys:
            if not key.is_mirrored:
                continue
            original = layout.get_key(key.mirror_of)
            assert key.x == pytest.approx(axis_x + (axis_x - original.x))
            assert key.y == pytest.approx(original.y)
            assert key.rot == -original.rot
            assert key.row_index == original.row_index

    def test_mirror_ids(self, split_project):
        ids = [key.id for key in split_project.parsed.keys]

        assert len(ids) == 8
        assert "mirror_main_outer_bottom" in ids
        assert split_project.parsed.matrix.mirrored is True
        assert split_project.parsed.matrix.trrs_pin == "P9"

    def test_missing_trrs_pin_warns(self):
        layout = resolve_layout(
            {
                "points": {
                    "zones": {"main": {"columns": {"a": {}}, "rows": {"home": {}}}},
                    "mirror": {"distance": 10},
                }
            }
        )

        assert "TRRS pin not found for split QMK configuration" in layout.warnings
        assert layout.get_key("mirror_main_a_home").x == pytest.approx(10)

    def test_missing_mirror_ref_warns(self):
        layout = resolve_layout(
            {
                "points": {
                    "zones": {"main": {"columns": {"a": {}}, "rows": {"home": {}}}},
                    "mirror": {"ref": "ghost", "distance": 0},
                }
            }
        )

        assert "Mirror ref ghost not found" in layout.warnings


class TestDocumentHandling:
    def test_none_document_gives_empty_layout(self):
        layout = create_geometry_resolver().resolve(None)

        assert layout.keys == []
        assert layout.bounds is None

    def test_non_mapping_document_raises(self):
        with pytest.raises(LayoutParseError):
            resolve_layout(["not", "a", "mapping"])

    def test_invalid_yaml_raises(self):
        with pytest.raises(LayoutParseError, match="Failed to parse YAML"):
            load_layout_text("points: [unclosed")

    def test_blank_text_is_none(self):
        assert load_layout_text("   \n") is None


class TestBounds:
    def test_bounds_pad_half_a_key_and_flip_y(self):
        keys = [
            Key(id="a", zone="z", row="r", col="c", x=0, y=0, row_index=0, col_index=0),
            Key(id="b", zone="z", row="r", col="c", x=0, y=19.05, row_index=1, col_index=0),
        ]

        bounds = compute_bounds(keys)

        assert bounds.min_x == pytest.approx(-9.525)
        assert bounds.max_x == pytest.approx(9.525)
        assert bounds.min_y == pytest.approx(-19.05 - 9.525)
        assert bounds.max_y == pytest.approx(9.525)
        assert bounds.width == pytest.approx(19.05)
        assert bounds.height == pytest.approx(38.1)

    def test_no_keys_no_bounds(self):
        assert compute_bounds([]) is None


class TestUtils:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("2u", 38.1), ("0.5u", 9.525), (7, 7.0), ("3", 3.0), ("abc", 0.0), (None, 0.0)],
    )
    def test_parse_distance(self, value, expected):
        assert parse_distance(value, 19.05) == pytest.approx(expected)

    def test_to_number_rejects_non_finite(self):
        assert to_number(float("inf"), 1.5) == 1.5
        assert to_number("", 4.0) == 0.0

    def test_expand_dots_nests_dotted_keys(self):
        assert expand_dots({"a.b": 1, "a.c": {"d": 2}, "e": [{"f.g": 3}]}) == {
            "a": {"b": 1, "c": {"d": 2}},
            "e": [{"f": {"g": 3}}],
        }

    def test_expand_dots_merges_shallowly(self):
        expanded = expand_dots({"a.b": {"x": 1}, "a": {"b": {"y": 2}}})

        assert expanded == {"a": {"b": {"y": 2}}}
