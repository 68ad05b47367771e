from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Sequence, Union

from ..models_catalog import Product
from ..resources import PRODUCTS, ResourceDescriptor
from .resource_client import ResourceClient, decode_model

ImageSource = Union[str, Path, tuple[str, IO[bytes]]]


@dataclass
class ProductsClient(ResourceClient):
    descriptor: ResourceDescriptor = PRODUCTS

    def publish(self, product_id: int | str) -> Product:
        return self._lifecycle(product_id, "publish")

    def archive(self, product_id: int | str) -> Product:
        return self._lifecycle(product_id, "archive")

    def save_draft(self, product_id: int | str) -> Product:
        return self._lifecycle(product_id, "save-draft")

    def upload_primary_image(self, product_id: int | str, image: ImageSource, alt_text: str = "") -> Any:
        with ExitStack() as stack:
            files = [("image", _open_image(stack, image))]
            return self.perform_action(
                product_id,
                "upload-primary-image",
                files=files,
                data={"alt_text": alt_text},
            )

    def upload_gallery_images(self, product_id: int | str, images: Sequence[ImageSource], alt_text: str = "") -> Any:
        if not images:
            raise ValueError("at least one gallery image is required")
        with ExitStack() as stack:
            files = [("images", _open_image(stack, image)) for image in images]
            return self.perform_action(
                product_id,
                "upload-gallery-images",
                files=files,
                data={"alt_text": alt_text},
            )

    def _lifecycle(self, product_id: int | str, action: str) -> Product:
        return decode_model(self.perform_action(product_id, action), Product, resource="products", operation=action)


def _open_image(stack: ExitStack, image: ImageSource) -> tuple[str, IO[bytes]]:
    if isinstance(image, tuple):
        return image
    path = Path(image)
    return path.name, stack.enter_context(path.open("rb"))
