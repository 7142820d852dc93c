"""Export service: render a project into firmware source files."""

from enum import Enum
from pathlib import Path

from ergobox.adapters.template_adapter import create_template_adapter
from ergobox.bindings.models import Dialect
from ergobox.core.errors import ExportError
from ergobox.core.structlog_logger import get_struct_logger
from ergobox.generators.base import KeymapExport
from ergobox.generators.qmk import QmkGenerator, create_qmk_generator
from ergobox.generators.zmk import ZmkGenerator, create_zmk_generator
from ergobox.project.models import KeymapProject


logger = get_struct_logger(__name__)


class ExportTarget(str, Enum):
    ZMK = "zmk"
    QMK = "qmk"
    ALL = "all"

    @property
    def dialects(self) -> tuple[Dialect, ...]:
        if self is ExportTarget.ALL:
            return (Dialect.ZMK, Dialect.QMK)
        return (Dialect(self.value),)


class ExportService:
    """Renders ZMK and QMK artifacts for a project."""

    def __init__(
        self,
        zmk_generator: ZmkGenerator,
        qmk_generator: QmkGenerator,
        keyboard_name: str = "custom-ergogen",
    ) -> None:
        self._zmk = zmk_generator
        self._qmk = qmk_generator
        self.keyboard_name = keyboard_name

    def build_export(
        self,
        project: KeymapProject,
        dialect: Dialect | str,
        include_skipped: bool = False,
    ) -> KeymapExport:
        """Collect the keys, layers and per-dialect settings for one dialect.

        Raises:
            ExportError: If the project has no resolved layout with a matrix
        """
        parsed = project.parsed
        if parsed is None or parsed.matrix is None:
            raise ExportError(
                "Project has no resolved layout to export; run 'project reparse' first"
            )
        dialect = Dialect(dialect)
        return KeymapExport(
            keys=parsed.export_keys(include_skipped),
            layers=project.layers,
            matrix=parsed.matrix,
            default_layer=project.default_layer(dialect),
            unicode_os=project.unicode_os(dialect),
            hold_letters=project.magic.hold_letters,
        )

    def render(
        self,
        project: KeymapProject,
        target: ExportTarget | str = ExportTarget.ALL,
        include_skipped: bool = False,
    ) -> dict[str, str]:
        """Rendered artifacts keyed by relative output path."""
        artifacts: dict[str, str] = {}
        for dialect in ExportTarget(target).dialects:
            export = self.build_export(project, dialect, include_skipped)
            if dialect is Dialect.ZMK:
                rendered = self._zmk.generate(export, self.keyboard_name)
            else:
                rendered = self._qmk.generate(export)
            artifacts.update(
                {f"{dialect.value}/{name}": text for name, text in rendered.items()}
            )
        return artifacts

    def write(
        self,
        project: KeymapProject,
        output_dir: str | Path,
        target: ExportTarget | str = ExportTarget.ALL,
        include_skipped: bool = False,
    ) -> list[Path]:
        """Render and write artifacts below ``output_dir``; returns written paths."""
        artifacts = self.render(project, target, include_skipped)
        root = Path(output_dir)
        written = []
        for relative, text in artifacts.items():
            path = root / relative
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(text, encoding="utf-8")
            except OSError as e:
                raise ExportError(
                    f"Cannot write {path}: {e}", context={"path": str(path)}
                ) from e
            written.append(path)
        logger.info("artifacts_written", output_dir=str(root), files=len(written))
        return written


def create_export_service(
    keyboard_name: str = "custom-ergogen",
    manufacturer: str = "custom",
    maintainer: str = "you",
) -> ExportService:
    """Create an ExportService with the given keyboard metadata."""
    template_adapter = create_template_adapter()
    return ExportService(
        zmk_generator=create_zmk_generator(template_adapter),
        qmk_generator=create_qmk_generator(
            keyboard_name=keyboard_name,
            manufacturer=manufacturer,
            maintainer=maintainer,
            template_adapter=template_adapter,
        ),
        keyboard_name=keyboard_name,
    )
