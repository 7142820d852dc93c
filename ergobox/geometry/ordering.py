"""Sequential key ordering used when assigning bindings key by key."""

from collections.abc import Iterable

from ergobox.geometry.models import Key


def capture_order(
    keys: Iterable[Key],
    mirrored: bool = False,
    row_descending: bool = False,
    col_descending: bool = False,
) -> list[Key]:
    """Order visible keys for sequential assignment.

    Unmirrored layouts walk column by column, then row by row. Mirrored
    layouts walk row by row; within a row the original half runs by column and
    the mirrored half follows in reverse column order.

    Args:
        keys: Candidate keys; skipped positions are dropped
        mirrored: Whether the layout carries a mirrored half
        row_descending: Walk rows from the highest index down
        col_descending: Walk columns from the highest index down

    Returns:
        New list of keys in assignment order
    """
    row_dir = -1 if row_descending else 1
    col_dir = -1 if col_descending else 1
    visible = [key for key in keys if not key.skip]

    if not mirrored:
        return sorted(
            visible,
            key=lambda k: (
                k.col_index * col_dir,
                k.row_index * row_dir,
                k.zone_order,
                k.id,
            ),
        )

    ordered: list[Key] = []
    row_indices = sorted({key.row_index for key in visible}, key=lambda r: r * row_dir)
    for row_index in row_indices:
        row_keys = [key for key in visible if key.row_index == row_index]
        main = sorted(
            (key for key in row_keys if not key.is_mirrored),
            key=lambda k: (k.col_index * col_dir, k.zone_order, k.id),
        )
        mirror = sorted(
            (key for key in row_keys if key.is_mirrored),
            key=lambda k: (-k.col_index * col_dir, k.zone_order, k.id),
        )
        ordered.extend(main)
        ordered.extend(mirror)
    return ordered
