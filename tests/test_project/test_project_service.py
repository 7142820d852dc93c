"""Tests for project level edits."""

import pytest

from ergobox.bindings.layers import layer_binding
from ergobox.bindings.models import Binding
from ergobox.project.service import clear_binding


A = Binding(zmk="&kp A", qmk="KC_A")


class TestCreateProject:
    def test_defaults(self, single_column_project):
        project = single_column_project

        assert project.layer_names == ["Base"]
        assert project.selected_key_id == "main_inner_bottom"
        assert project.unicode_os("zmk") == "linux"
        assert project.magic.hold_letters == ["A", "B", "C", "P", "V", "X"]
        assert [key.id for key in project.parsed.keys] == [
            "main_inner_bottom",
            "main_inner_home",
        ]

    def test_settings_from_arguments(self, project_service, single_column_yaml):
        project = project_service.create_project(
            single_column_yaml, unicode_os="macos", hold_letters=["c", "a"]
        )

        assert project.unicode_os("qmk") == "macos"
        assert project.magic.hold_letters == ["A", "C"]

    def test_empty_layout(self, project_service):
        project = project_service.create_project("")

        assert project.parsed.keys == []
        assert project.selected_key_id is None


class TestSetBinding:
    def test_assigns_on_active_layer(self, project_service, single_column_project):
        project = project_service.set_binding(single_column_project, "main_inner_home", A)

        assert project.layers[0].binding_for("main_inner_home") == A
        assert project.selected_key_id == "main_inner_home"
        assert single_column_project.layers[0].bindings == {}

    def test_unknown_key(self, project_service, single_column_project):
        with pytest.raises(ValueError, match="Key nope does not exist"):
            project_service.set_binding(single_column_project, "nope", A)

    def test_unknown_layer(self, project_service, single_column_project):
        with pytest.raises(ValueError, match="Layer 4 does not exist"):
            project_service.set_binding(single_column_project, "main_inner_home", A, 4)

    def test_clear_binding(self):
        assert clear_binding() == Binding(zmk="&none", qmk="KC_NO")


class TestLayerEdits:
    @pytest.fixture
    def three_layers(self, project_service, single_column_project):
        project = project_service.add_layer(single_column_project)
        project = project_service.add_layer(project)
        return project_service.set_binding(
            project, "main_inner_bottom", layer_binding(2), layer=0
        )

    def test_add_layer_activates_it(self, three_layers):
        assert three_layers.layer_names == ["Base", "Layer 1", "Layer 2"]
        assert three_layers.active_layer == 2

    def test_remove_layer_rewrites_and_resets_active(self, project_service, three_layers):
        project = project_service.remove_layer(three_layers, 1)

        assert project.layer_names == ["Base", "Layer 2"]
        assert project.active_layer == 0
        assert project.layers[0].binding_for("main_inner_bottom") == Binding(
            zmk="&mo 1", qmk="MO(1)"
        )

    def test_default_layer_follows_layer_id(self, project_service, three_layers):
        project = project_service.set_default_layer(three_layers, "zmk", 2)

        moved = project_service.move_layer(project, 2, 1)
        assert moved.default_layer("zmk") == 1
        assert moved.default_layer("qmk") == 0
        assert moved.active_layer == 1

        removed = project_service.remove_layer(moved, 1)
        assert removed.default_layer("zmk") == 0

    def test_noop_returns_same_project(self, project_service, three_layers):
        assert project_service.remove_layer(three_layers, 0) is three_layers
        assert project_service.move_layer(three_layers, 0, 2) is three_layers

    def test_duplicate_defaults_to_active_layer(self, project_service, three_layers):
        project = project_service.duplicate_layer(three_layers)

        assert project.layer_names[-1] == "Layer 2 Copy"
        assert project.active_layer == 3

    def test_rename_keeps_active_layer(self, project_service, three_layers):
        project = project_service.rename_layer(three_layers, 1, "Nav")

        assert project.layer_names == ["Base", "Nav", "Layer 2"]
        assert project.active_layer == 2


class TestReparse:
    def test_layers_survive_reparse(
        self, project_service, single_column_project, split_yaml
    ):
        project = project_service.set_binding(single_column_project, "main_inner_home", A)

        reparsed = project_service.reparse(project, split_yaml)

        assert len(reparsed.parsed.keys) == 8
        assert reparsed.layers[0].binding_for("main_inner_home") == A
        assert reparsed.selected_key_id == "main_inner_home"
        assert reparsed.layout_yaml == split_yaml

    def test_missing_selected_key_falls_back(self, project_service, split_project):
        project = split_project.model_copy(
            update={"selected_key_id": "mirror_main_outer_home"}
        )

        reparsed = project_service.reparse(
            project, "points:\n  zones:\n    z:\n      columns: {c: {}}\n      rows: {r: {}}\n"
        )

        assert reparsed.selected_key_id == "z_c_r"


class TestSettings:
    def test_unicode_os_per_dialect(self, project_service, single_column_project):
        project = project_service.set_unicode_os(single_column_project, "qmk", "winnumpad")

        assert project.unicode_os("qmk") == "winnumpad"
        assert project.unicode_os("zmk") == "linux"

    def test_unknown_unicode_os_falls_back(self, project_service, single_column_project):
        project = project_service.set_unicode_os(single_column_project, "zmk", "beos")

        assert project.unicode_os("zmk") == "linux"

    def test_default_layer_is_clamped(self, project_service, single_column_project):
        project = project_service.set_default_layer(single_column_project, "qmk", 5)

        assert project.default_layers.qmk == 0

    def test_hold_letters(self, project_service, single_column_project):
        project = project_service.set_hold_letters(single_column_project, ["z", "Q", "z"])

        assert project.magic.hold_letters == ["Q", "Z"]
