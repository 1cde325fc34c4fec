"""
Tests for the product catalog and admin product management.
"""
import pytest

from conftest import auth_headers, make_user
from models.log import Log
from models.product import Product


NEW_BUNDLE = {
    "display_name": "10 Press Release Bundle",
    "short_name": "pr10",
    "description": "Ten press releases",
    "price": 9000,
    "product_type": "pr",
    "product_credits": 10,
}


@pytest.mark.integration
class TestCatalog:
    """Test suite for GET /products."""

    def test_lists_active_products_cheapest_first(self, client, db_session, customer, pr_bundle) -> None:
        """Test only active, non-deleted products are listed, ordered by price."""
        db_session.add_all([
            Product(display_name="Single", price=1500, product_type="pr", product_credits=1, is_active=True),
            Product(display_name="Hidden", price=100, product_type="pr", product_credits=1, is_active=False),
            Product(display_name="Gone", price=200, product_type="pr", product_credits=1, is_active=True, is_deleted=True),
        ])
        db_session.commit()

        body = client.get("/products", headers=auth_headers(customer)).json()
        assert body["total"] == 2
        assert [p["display_name"] for p in body["items"]] == ["Single", "5 Press Release Bundle"]

    def test_filter_by_type(self, client, db_session, customer, pr_bundle) -> None:
        """Test the product_type filter."""
        db_session.add(Product(display_name="Media DB", price=4900, product_type="newsdb", product_credits=100, is_active=True))
        db_session.commit()

        body = client.get("/products", params={"product_type": "newsdb"}, headers=auth_headers(customer)).json()
        assert [p["display_name"] for p in body["items"]] == ["Media DB"]


@pytest.mark.integration
class TestAdminProducts:
    """Test suite for /admin/products."""

    def test_create(self, client, db_session, admin) -> None:
        """Test an admin can add a product; it defaults to active."""
        response = client.post("/admin/products", json=NEW_BUNDLE, headers=auth_headers(admin))
        assert response.status_code == 200
        body = response.json()
        assert body["display_name"] == "10 Press Release Bundle"
        assert body["price"] == 9000
        assert body["is_active"] is True
        assert body["is_deleted"] is False

        assert db_session.query(Product).count() == 1
        assert db_session.query(Log).filter(Log.action == "PRODUCT_CREATE").count() == 1

    def test_staff_can_manage_products(self, client, db_session) -> None:
        """Test staff accounts hold the product permission."""
        staff = make_user(db_session, "staff@newsworthy.test", is_staff=True)
        response = client.post("/admin/products", json=NEW_BUNDLE, headers=auth_headers(staff))
        assert response.status_code == 200

    @pytest.mark.parametrize("missing", ["display_name", "price", "product_type"])
    def test_create_requires_fields(self, client, admin, missing: str) -> None:
        """Test display name, price and type are required."""
        payload = {k: v for k, v in NEW_BUNDLE.items() if k != missing}
        response = client.post("/admin/products", json=payload, headers=auth_headers(admin))
        assert response.status_code == 400
        assert response.json()["detail"] == "Display name, price, and distribution tag are required"

    def test_customer_forbidden(self, client, customer) -> None:
        """Test users without the permission get a 403."""
        assert client.post("/admin/products", json=NEW_BUNDLE, headers=auth_headers(customer)).status_code == 403
        assert client.get("/admin/products", headers=auth_headers(customer)).status_code == 403

    def test_editor_forbidden(self, client, editor) -> None:
        """Test editors cannot manage the catalog."""
        assert client.post("/admin/products", json=NEW_BUNDLE, headers=auth_headers(editor)).status_code == 403

    def test_update(self, client, db_session, admin, pr_bundle) -> None:
        """Test a full replace of the product fields."""
        payload = dict(NEW_BUNDLE, price=8500, label="Sale")
        response = client.put(f"/admin/products/{pr_bundle.id}", json=payload, headers=auth_headers(admin))
        assert response.status_code == 200

        db_session.expire_all()
        assert pr_bundle.price == 8500
        assert pr_bundle.label == "Sale"
        assert pr_bundle.product_credits == 10

    def test_update_missing(self, client, admin) -> None:
        """Test updating an unknown product is a 404."""
        response = client.put("/admin/products/999", json=NEW_BUNDLE, headers=auth_headers(admin))
        assert response.status_code == 404

    def test_soft_delete(self, client, db_session, admin, customer, pr_bundle) -> None:
        """Test deletion hides the product but keeps the row."""
        response = client.delete(f"/admin/products/{pr_bundle.id}", headers=auth_headers(admin))
        assert response.status_code == 200
        assert response.json() == {"success": True}

        db_session.expire_all()
        assert db_session.query(Product).filter(Product.id == pr_bundle.id).one().is_deleted is True
        assert client.get("/products", headers=auth_headers(customer)).json()["total"] == 0
        assert client.get("/admin/products", headers=auth_headers(admin)).json()["total"] == 0

    def test_delete_twice(self, client, admin, pr_bundle) -> None:
        """Test a deleted product is treated as missing."""
        client.delete(f"/admin/products/{pr_bundle.id}", headers=auth_headers(admin))
        response = client.delete(f"/admin/products/{pr_bundle.id}", headers=auth_headers(admin))
        assert response.status_code == 404
