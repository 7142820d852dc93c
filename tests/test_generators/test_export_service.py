"""Tests for the export service."""

import pytest

from ergobox.bindings.models import Dialect
from ergobox.core.errors import ExportError
from ergobox.generators.service import ExportTarget, create_export_service
from ergobox.project.models import KeymapProject


class TestExportTarget:
    def test_dialects(self):
        assert ExportTarget.ALL.dialects == (Dialect.ZMK, Dialect.QMK)
        assert ExportTarget("qmk").dialects == (Dialect.QMK,)


class TestExportService:
    def test_render_all(self, single_column_project):
        artifacts = create_export_service(keyboard_name="kb").render(
            single_column_project
        )

        assert sorted(artifacts) == [
            "qmk/config.h",
            "qmk/info.json",
            "qmk/keymap.c",
            "qmk/rules.mk",
            "zmk/kb.keymap",
            "zmk/kb_left.overlay",
            "zmk/kb_right.overlay",
        ]

    def test_render_single_target(self, single_column_project):
        artifacts = create_export_service().render(single_column_project, "zmk")

        assert all(path.startswith("zmk/") for path in artifacts)

    def test_include_skipped(self, project_service):
        project = project_service.create_project(
            "points:\n  zones:\n    z:\n      columns:\n        c:\n"
            "          rows: {r0: {skip: true}}\n      rows: {r0: {}, r1: {}}\n"
        )
        service = create_export_service()

        assert len(service.build_export(project, "zmk").keys) == 1
        assert len(service.build_export(project, "zmk", include_skipped=True).keys) == 2

    def test_export_without_layout_fails(self):
        with pytest.raises(ExportError, match="no resolved layout"):
            create_export_service().render(KeymapProject())

    def test_write(self, single_column_project, tmp_path):
        written = create_export_service().write(
            single_column_project, tmp_path / "out", ExportTarget.QMK
        )

        assert sorted(path.name for path in written) == [
            "config.h",
            "info.json",
            "keymap.c",
            "rules.mk",
        ]
        assert all(path.parent == tmp_path / "out" / "qmk" for path in written)
        assert (tmp_path / "out" / "qmk" / "rules.mk").read_text().startswith(
            "SPLIT_KEYBOARD"
        )

    def test_write_failure_is_export_error(self, single_column_project, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(ExportError, match="Cannot write"):
            create_export_service().write(single_column_project, blocker)
