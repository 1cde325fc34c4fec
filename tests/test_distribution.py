"""
Tests for spending upgrade credits on a release's distribution.
"""
import pytest

from conftest import auth_headers
from models.credits import BrandCredit
from models.product import Product
from models.release import Release
from utils import credits as ledger


@pytest.fixture
def upgrades(db_session) -> Product:
    """Enhanced distribution upgrade plus products the customer must not see."""
    enhanced = Product(short_name="plus1", display_name="Enhanced Distribution", price=2500,
                       product_type="enhanced", product_credits=1, is_active=True, is_upgrade=True)
    db_session.add_all([
        enhanced,
        Product(short_name="inactive", price=100, product_type="video", is_active=False, is_upgrade=True),
        Product(short_name="other", price=100, product_type="podcast", partner_id=2, is_active=True, is_upgrade=True),
        Product(short_name="pr5", price=5000, product_type="pr", product_credits=5, is_active=True),
    ])
    db_session.commit()
    return enhanced


@pytest.fixture
def release_uuid(client, customer, funded_company) -> str:
    response = client.post(
        "/pr", json={"company_id": funded_company.id, "title": "Acme Ships Arm"}, headers=auth_headers(customer)
    )
    return response.json()["uuid"]


def use_credit(client, user, release_uuid: str, product_type="enhanced"):
    return client.post(
        f"/pr/{release_uuid}/distribution",
        json={"action": "use_credit", "product_type": product_type},
        headers=auth_headers(user),
    )


@pytest.mark.integration
class TestDistribution:
    """Test suite for /pr/{uuid}/distribution."""

    def test_lists_upgrades_and_balances(self, client, db_session, customer, funded_company, upgrades, release_uuid) -> None:
        """Test the step shows offered upgrades and per-type balances."""
        ledger.grant_credits(db_session, user_id=customer.id, company_id=funded_company.id,
                             credits=1, product_type="enhanced")
        db_session.commit()

        response = client.get(f"/pr/{release_uuid}/distribution", headers=auth_headers(customer))
        assert response.status_code == 200
        body = response.json()
        assert body["distribution"] is None
        assert body["credit_balance"] == {"pr": 1, "enhanced": 1}
        assert [p["type"] for p in body["products"]] == ["enhanced"]
        assert body["products"][0]["price_display"] == "$25"

    def test_use_credit(self, client, db_session, customer, funded_company, upgrades, release_uuid) -> None:
        """Test spending an upgrade credit debits the brand and records the upgrade."""
        ledger.grant_credits(db_session, user_id=customer.id, company_id=funded_company.id,
                             credits=1, product_type="enhanced")
        db_session.commit()

        response = use_credit(client, customer, release_uuid)
        assert response.status_code == 200
        assert response.json() == {"success": True, "distribution": "enhanced"}

        db_session.expire_all()
        release = db_session.query(Release).filter(Release.uuid == release_uuid).one()
        row = db_session.query(BrandCredit).filter(BrandCredit.product_type == "enhanced",
                                                   BrandCredit.credits == -1).one()
        assert row.pr_id == release.id
        assert row.company_id == funded_company.id
        assert ledger.type_balance(db_session, customer.id, funded_company.id, "enhanced") == 0

    def test_insufficient_credits(self, client, db_session, customer, upgrades, release_uuid) -> None:
        """Test an upgrade without a matching credit is refused."""
        response = use_credit(client, customer, release_uuid)
        assert response.status_code == 400
        assert response.json()["detail"] == "Insufficient credits"
        assert db_session.query(BrandCredit).filter(BrandCredit.product_type == "enhanced").count() == 0

    def test_pr_credits_do_not_pay_for_upgrades(self, client, customer, funded_company, upgrades, release_uuid) -> None:
        """Test the remaining press release credit cannot be spent on an upgrade."""
        assert use_credit(client, customer, release_uuid).status_code == 400

    @pytest.mark.parametrize("product_type", ["video", "podcast", "pr", None])
    def test_type_not_offered(self, client, customer, upgrades, release_uuid, product_type) -> None:
        """Test inactive, foreign-partner and non-upgrade types are rejected."""
        response = use_credit(client, customer, release_uuid, product_type=product_type)
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid product type"

    def test_skip_then_upgrade(self, client, db_session, customer, funded_company, upgrades, release_uuid) -> None:
        """Test skipping sets standard distribution and a later upgrade replaces it."""
        response = client.post(f"/pr/{release_uuid}/distribution", json={"action": "skip"},
                               headers=auth_headers(customer))
        assert response.json()["distribution"] == "standard"

        ledger.grant_credits(db_session, user_id=customer.id, company_id=funded_company.id,
                             credits=1, product_type="enhanced")
        db_session.commit()
        assert use_credit(client, customer, release_uuid).json()["distribution"] == "enhanced"

    def test_unknown_action(self, client, customer, release_uuid) -> None:
        response = client.post(f"/pr/{release_uuid}/distribution", json={"action": "refund"},
                               headers=auth_headers(customer))
        assert response.status_code == 422

    def test_delete_returns_upgrade_credit(self, client, db_session, customer, funded_company, upgrades, release_uuid) -> None:
        """Test deleting the release hands back the upgrade credit too."""
        ledger.grant_credits(db_session, user_id=customer.id, company_id=funded_company.id,
                             credits=1, product_type="enhanced")
        db_session.commit()
        use_credit(client, customer, release_uuid)

        assert client.post(f"/pr/{release_uuid}/delete", headers=auth_headers(customer)).status_code == 200
        assert ledger.type_balance(db_session, customer.id, funded_company.id, "enhanced") == 1

    def test_other_users_release(self, client, other_customer, upgrades, release_uuid) -> None:
        assert client.get(f"/pr/{release_uuid}/distribution", headers=auth_headers(other_customer)).status_code == 403
        assert use_credit(client, other_customer, release_uuid).status_code == 403

    def test_unknown_release(self, client, customer) -> None:
        assert client.get("/pr/missing/distribution", headers=auth_headers(customer)).status_code == 404
