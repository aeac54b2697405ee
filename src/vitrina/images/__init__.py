"""
Orden de las imágenes de cada inmueble.

La posición 0 es siempre la portada.
"""

from vitrina.images.sequencing import (
    Direction,
    append_new,
    apply_order,
    index_of,
    is_normalized,
    move_adjacent,
    normalize,
    promote_to_first,
    remove_image,
    sort_images,
)

__all__ = [
    "Direction",
    "append_new",
    "apply_order",
    "index_of",
    "is_normalized",
    "move_adjacent",
    "normalize",
    "promote_to_first",
    "remove_image",
    "sort_images",
]
