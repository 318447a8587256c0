# app/repos/product_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.data.models.product import ProductModel
from app.domain.exceptions import InsufficientStockError, ProductNotFoundError


class ProductRepo:
    """
    Dostep do katalogu. Nie robi commit, sesja jest kontekstem transakcji
    wywolujacego serwisu.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_stock_for_update(self, product_id: int) -> ProductModel:
        # swiezy odczyt w tej samej transakcji co pozniejszy zapis, nie z identity map
        product = self.db.execute(
            select(ProductModel)
            .where(ProductModel.id == product_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def decrement_stock(self, product_id: int, requested_quantity: int) -> int:
        """
        Atomowe sprawdz-i-zmniejsz dla jednego produktu:
        UPDATE products SET quantity = quantity - n WHERE id = ? AND quantity >= n

        Zwraca nowy stan magazynu (zawsze >= 0).
        """
        if requested_quantity <= 0:
            raise ValueError("Requested quantity must be greater than 0")

        result = self.db.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.quantity >= requested_quantity,
            )
            .values(quantity=ProductModel.quantity - requested_quantity)
            .execution_options(synchronize_session=False)
        )

        # 0 rows affected -> produktu nie ma albo ktos wykupil stan przed nami
        if result.rowcount == 0:
            product = self.db.get(ProductModel, product_id, populate_existing=True)
            if product is None:
                raise ProductNotFoundError(product_id)
            raise InsufficientStockError(
                product_id=product_id,
                requested=requested_quantity,
                available=product.quantity,
                name=product.name,
            )

        product = self.db.get(ProductModel, product_id, populate_existing=True)
        return product.quantity
