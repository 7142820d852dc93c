"""Tests for sequential key ordering."""

from ergobox.geometry.ordering import capture_order


class TestCaptureOrder:
    def test_unmirrored_walks_columns_then_rows(self, split_project):
        main_keys = [key for key in split_project.parsed.keys if not key.is_mirrored]

        ordered = capture_order(main_keys, mirrored=False)

        assert [key.id for key in ordered] == [
            "main_outer_bottom",
            "main_outer_home",
            "main_inner_bottom",
            "main_inner_home",
        ]

    def test_mirrored_walks_rows_with_reversed_mirror_half(self, split_project):
        ordered = capture_order(split_project.parsed.keys, mirrored=True)

        assert [key.id for key in ordered[:4]] == [
            "main_outer_bottom",
            "main_inner_bottom",
            "mirror_main_inner_bottom",
            "mirror_main_outer_bottom",
        ]
        assert ordered[4].id == "main_outer_home"

    def test_descending_directions(self, split_project):
        main_keys = [key for key in split_project.parsed.keys if not key.is_mirrored]

        ordered = capture_order(main_keys, row_descending=True, col_descending=True)

        assert [key.id for key in ordered] == [
            "main_inner_home",
            "main_inner_bottom",
            "main_outer_home",
            "main_outer_bottom",
        ]

    def test_skipped_keys_are_dropped(self, single_column_project):
        keys = single_column_project.parsed.keys
        skipped = [keys[0].model_copy(update={"skip": True}), keys[1]]

        assert [key.id for key in capture_order(skipped)] == ["main_inner_home"]
