"""Catalogue maintenance: commands and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class AddProduct:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    stock_quantity = Integer(default=0, min_value=0)
    category = String(max_length=100)
    image_url = String(max_length=500)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    stock_quantity = Integer(required=True, min_value=0)
    category = String(max_length=100)
    image_url = String(max_length=500)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductsHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            name=command.name,
            description=command.description,
            price=command.price,
            stock_quantity=command.stock_quantity or 0,
            category=command.category,
            image_url=command.image_url,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product added", product_id=str(product.id), name=product.name)
        return product.as_payload()

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.fetch(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            stock_quantity=command.stock_quantity,
            category=command.category,
            image_url=command.image_url,
        )
        repo.add(product)
        return product.as_payload()

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.fetch(command.product_id)
        payload = product.as_payload()
        repo.remove(product)
        logger.info("Product deleted", product_id=payload["id"])
        return payload
