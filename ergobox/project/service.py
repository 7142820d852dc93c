"""Project level edits: geometry re-parse, layer edits and key assignment."""

from collections.abc import Sequence

from ergobox.bindings.dialects import QMK, ZMK
from ergobox.bindings.magic import normalize_hold_letters
from ergobox.bindings.models import Binding, Dialect, get_unicode_os
from ergobox.core.structlog_logger import get_struct_logger
from ergobox.geometry.models import ResolvedLayout
from ergobox.geometry.resolver import (
    GeometryResolver,
    create_geometry_resolver,
    load_layout_text,
)
from ergobox.layout.layer.service import (
    LayerEdit,
    LayoutLayerService,
    create_layout_layer_service,
)
from ergobox.layout.models import (
    Layer,
    clamp_layer_index,
    create_layer,
    find_layer_index_by_id,
)
from ergobox.project.models import (
    DefaultLayers,
    KeymapProject,
    MagicSettings,
    UnicodeOsSettings,
    UnicodeSettings,
)


logger = get_struct_logger(__name__)


def clear_binding() -> Binding:
    """Explicit no-action assignment."""
    return Binding(zmk=ZMK.none, qmk=QMK.none)


class ProjectService:
    """Applies edits to a KeymapProject and returns the updated project.

    Layer edits keep the active layer on the layer it pointed at (or reset it
    to the base layer after a removal) and keep each dialect's default layer
    on the same layer by id.
    """

    def __init__(
        self,
        resolver: GeometryResolver,
        layer_service: LayoutLayerService,
    ) -> None:
        self._resolver = resolver
        self._layer_service = layer_service

    # Geometry

    def resolve_text(self, layout_yaml: str) -> ResolvedLayout:
        layout = self._resolver.resolve(load_layout_text(layout_yaml))
        logger.info(
            "layout_resolved",
            keys=len(layout.keys),
            warnings=len(layout.warnings),
        )
        return layout

    def create_project(
        self,
        layout_yaml: str,
        unicode_os: str | None = None,
        hold_letters: Sequence[str] | None = None,
    ) -> KeymapProject:
        """Resolve a layout and start a project with a single ``Base`` layer."""
        parsed = self.resolve_text(layout_yaml)
        os_id = get_unicode_os(unicode_os).id
        return KeymapProject(
            layout_yaml=layout_yaml,
            parsed=parsed,
            layers=[create_layer(0)],
            selected_key_id=self._first_visible_key(parsed),
            unicode=UnicodeSettings(os=UnicodeOsSettings(zmk=os_id, qmk=os_id)),
            magic=MagicSettings(
                hold_letters=normalize_hold_letters(
                    list(hold_letters) if hold_letters is not None else None
                )
            ),
        )

    def reparse(self, project: KeymapProject, layout_yaml: str) -> KeymapProject:
        """Replace the geometry of a project and keep its layers.

        Bindings of keys that no longer exist are kept so that a later
        re-parse restoring those keys brings them back.
        """
        parsed = self.resolve_text(layout_yaml)
        layers = [layer.model_copy() for layer in project.layers] or [create_layer(0)]
        selected = project.selected_key_id
        if not selected or parsed.get_key(selected) is None:
            selected = self._first_visible_key(parsed)
        return project.model_copy(
            update={
                "layout_yaml": layout_yaml,
                "parsed": parsed,
                "layers": layers,
                "selected_key_id": selected,
            }
        )

    @staticmethod
    def _first_visible_key(parsed: ResolvedLayout) -> str | None:
        visible = parsed.visible_keys
        return visible[0].id if visible else None

    # Layers

    def _apply(
        self, project: KeymapProject, edit: LayerEdit, active_layer: int | None
    ) -> KeymapProject:
        if not edit.changed:
            return project
        old_layers = project.layers
        zmk_id = self._layer_id_at(old_layers, project.default_layers.zmk)
        qmk_id = self._layer_id_at(old_layers, project.default_layers.qmk)
        if active_layer is None:
            mapped = edit.index_map.get(project.active_layer)
            active_layer = mapped if mapped is not None else 0
        return project.model_copy(
            update={
                "layers": edit.layers,
                "active_layer": clamp_layer_index(active_layer, edit.layers),
                "default_layers": DefaultLayers(
                    zmk=find_layer_index_by_id(edit.layers, zmk_id, 0),
                    qmk=find_layer_index_by_id(edit.layers, qmk_id, 0),
                ),
            }
        )

    @staticmethod
    def _layer_id_at(layers: Sequence[Layer], index: int) -> str | None:
        return layers[index].id if 0 <= index < len(layers) else None

    def add_layer(self, project: KeymapProject) -> KeymapProject:
        edit = self._layer_service.add_layer(project.layers)
        logger.info("layer_added", layer=edit.layers[-1].name)
        return self._apply(project, edit, active_layer=len(edit.layers) - 1)

    def duplicate_layer(
        self, project: KeymapProject, index: int | None = None
    ) -> KeymapProject:
        index = project.active_layer if index is None else index
        edit = self._layer_service.duplicate_layer(project.layers, index)
        if edit.changed:
            logger.info("layer_duplicated", source=index, layer=edit.layers[-1].name)
        return self._apply(project, edit, active_layer=len(edit.layers) - 1)

    def rename_layer(
        self, project: KeymapProject, index: int, name: str
    ) -> KeymapProject:
        edit = self._layer_service.rename_layer(project.layers, index, name)
        return self._apply(project, edit, active_layer=None)

    def remove_layer(
        self, project: KeymapProject, index: int | None = None
    ) -> KeymapProject:
        index = project.active_layer if index is None else index
        edit = self._layer_service.remove_layer(project.layers, index)
        if edit.changed:
            logger.info("layer_removed", index=index, layers=len(edit.layers))
        return self._apply(project, edit, active_layer=0)

    def move_layer(
        self, project: KeymapProject, from_index: int, to_index: int
    ) -> KeymapProject:
        edit = self._layer_service.reorder_layers(project.layers, from_index, to_index)
        if edit.changed:
            logger.info("layer_moved", source=from_index, target=to_index)
        return self._apply(project, edit, active_layer=None)

    # Bindings

    def set_binding(
        self,
        project: KeymapProject,
        key_id: str,
        binding: Binding,
        layer: int | None = None,
    ) -> KeymapProject:
        """Assign ``binding`` to ``key_id`` on ``layer`` (default: active layer).

        Raises:
            ValueError: If the layer index or the key id is unknown
        """
        index = project.active_layer if layer is None else layer
        target = project.get_layer(index)
        if target is None:
            raise ValueError(f"Layer {index} does not exist")
        if project.parsed is not None and project.parsed.get_key(key_id) is None:
            raise ValueError(f"Key {key_id} does not exist in the layout")

        layers = list(project.layers)
        layers[index] = target.with_binding(key_id, binding)
        logger.debug(
            "binding_set", layer=index, key=key_id, zmk=binding.zmk, qmk=binding.qmk
        )
        return project.model_copy(update={"layers": layers, "selected_key_id": key_id})

    # Settings

    def set_default_layer(
        self, project: KeymapProject, dialect: Dialect | str, index: int
    ) -> KeymapProject:
        field = Dialect(dialect).value
        defaults = project.default_layers.model_copy(
            update={field: clamp_layer_index(index, project.layers)}
        )
        return project.model_copy(update={"default_layers": defaults})

    def set_unicode_os(
        self, project: KeymapProject, dialect: Dialect | str, os_id: str
    ) -> KeymapProject:
        field = Dialect(dialect).value
        os_settings = project.unicode.os.model_copy(
            update={field: get_unicode_os(os_id).id}
        )
        return project.model_copy(update={"unicode": UnicodeSettings(os=os_settings)})

    def set_hold_letters(
        self, project: KeymapProject, letters: Sequence[str]
    ) -> KeymapProject:
        magic = MagicSettings(hold_letters=normalize_hold_letters(list(letters)))
        return project.model_copy(update={"magic": magic})


def create_project_service(
    resolver: GeometryResolver | None = None,
    layer_service: LayoutLayerService | None = None,
) -> ProjectService:
    """Create a ProjectService with default collaborators."""
    return ProjectService(
        resolver=resolver or create_geometry_resolver(),
        layer_service=layer_service or create_layout_layer_service(),
    )
