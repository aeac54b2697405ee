"""
Secuenciación de imágenes de un inmueble.

Invariante: tras cualquier operación que reordena, `display_order` es
0..n-1 según la posición en la lista y solo la posición 0 es primaria.
Cada operación termina con una renumeración completa de la lista, así
el estado (orden, portada) queda determinado por la posición.

Todas las funciones son puras: devuelven una lista nueva y no tocan la
de entrada. Persistir el resultado es responsabilidad del llamador.
"""

from typing import Literal, Optional

from vitrina.models import ListingImage

Direction = Literal["up", "down"]


def sort_images(images: list[ListingImage]) -> list[ListingImage]:
    """Ordena por `display_order` (nulo = 0), estable ante empates."""
    return sorted(images, key=lambda img: img.position)


def normalize(images: list[ListingImage]) -> list[ListingImage]:
    """Renumera toda la lista: orden = posición, primaria = posición 0."""
    return [
        img.model_copy(update={"display_order": idx, "is_primary": idx == 0})
        for idx, img in enumerate(images)
    ]


def is_normalized(images: list[ListingImage]) -> bool:
    """Verifica el invariante de orden denso y portada única en 0."""
    return all(
        img.display_order == idx and img.is_primary == (idx == 0)
        for idx, img in enumerate(images)
    )


def move_adjacent(
    images: list[ListingImage], index: int, direction: Direction
) -> list[ListingImage]:
    """
    Intercambia la imagen en `index` con su vecina hacia arriba o abajo.

    Sin vecina en esa dirección (o índice fuera de rango) no hace nada
    y devuelve la lista tal cual, sin renumerar.
    """
    if direction not in ("up", "down"):
        raise ValueError(f"Dirección inválida: {direction!r}")

    target = index - 1 if direction == "up" else index + 1
    if not (0 <= index < len(images)) or not (0 <= target < len(images)):
        return list(images)

    reordered = list(images)
    reordered[index], reordered[target] = reordered[target], reordered[index]
    return normalize(reordered)


def promote_to_first(images: list[ListingImage], image_id: str) -> list[ListingImage]:
    """Lleva la imagen a la posición 0 (portada). No-op si no está o ya es la primera."""
    index = index_of(images, image_id)
    if index is None or index == 0:
        return list(images)

    reordered = list(images)
    selected = reordered.pop(index)
    reordered.insert(0, selected)
    return normalize(reordered)


def append_new(
    images: list[ListingImage], new_images: list[ListingImage]
) -> list[ListingImage]:
    """
    Agrega imágenes recién subidas al final, continuando la secuencia.

    Solo la primera imagen de la primera subida de un inmueble sin
    imágenes queda como primaria.
    """
    start = max((img.position for img in images), default=-1) + 1
    appended = [
        img.model_copy(
            update={
                "display_order": start + offset,
                "is_primary": not images and offset == 0,
            }
        )
        for offset, img in enumerate(new_images)
    ]
    return list(images) + appended


def remove_image(images: list[ListingImage], image_id: str) -> list[ListingImage]:
    """Quita una imagen y renumera las restantes."""
    remaining = [img for img in images if img.id != image_id]
    if len(remaining) == len(images):
        return list(images)
    return normalize(remaining)


def apply_order(images: list[ListingImage], image_ids: list[str]) -> list[ListingImage]:
    """
    Reordena según una lista explícita de IDs (p. ej. para reintentar
    una escritura fallida con el mismo orden).

    Raises:
        ValueError: si `image_ids` no es una permutación de las imágenes
    """
    by_id = {img.id: img for img in images}
    if len(image_ids) != len(images) or set(image_ids) != set(by_id):
        raise ValueError("El orden enviado no coincide con las imágenes del inmueble")
    return normalize([by_id[image_id] for image_id in image_ids])


def index_of(images: list[ListingImage], image_id: str) -> Optional[int]:
    for idx, img in enumerate(images):
        if img.id == image_id:
            return idx
    return None
