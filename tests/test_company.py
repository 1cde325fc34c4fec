"""
Tests for companies (brands) and their contacts.
"""
import pytest

from conftest import auth_headers
from models.company import Company, Contact


@pytest.mark.integration
class TestCompany:
    """Test suite for /company."""

    def test_create_and_list(self, client, customer, other_customer) -> None:
        """Test a created company is listed for its owner only."""
        response = client.post(
            "/company",
            json={"company_name": "Globex", "website": "https://globex.example", "state": "CA"},
            headers=auth_headers(customer),
        )
        assert response.status_code == 201
        assert response.json()["uuid"]

        assert [c["company_name"] for c in client.get("/company", headers=auth_headers(customer)).json()] == ["Globex"]
        assert client.get("/company", headers=auth_headers(other_customer)).json() == []

    def test_name_required(self, client, customer) -> None:
        """Test company_name cannot be empty."""
        response = client.post("/company", json={"company_name": ""}, headers=auth_headers(customer))
        assert response.status_code == 422

    def test_update(self, client, customer, company) -> None:
        """Test partial updates leave other fields untouched."""
        response = client.put(
            f"/company/{company.uuid}",
            json={"phone": "555-0100", "city": "Austin"},
            headers=auth_headers(customer),
        )
        assert response.status_code == 200
        assert response.json()["company_name"] == "Acme Robotics"
        assert response.json()["phone"] == "555-0100"

    def test_stranger_cannot_update(self, client, other_customer, company) -> None:
        response = client.put(f"/company/{company.uuid}", json={"city": "Nowhere"}, headers=auth_headers(other_customer))
        assert response.status_code == 403

    def test_soft_delete(self, client, db_session, customer, company) -> None:
        """Test deletion hides the company but keeps the row."""
        assert client.delete(f"/company/{company.uuid}", headers=auth_headers(customer)).status_code == 200

        db_session.expire_all()
        assert db_session.query(Company).filter(Company.id == company.id).one().is_deleted is True
        assert client.get(f"/company/{company.uuid}", headers=auth_headers(customer)).status_code == 404

    def test_deleted_company_cannot_publish(self, client, customer, funded_company) -> None:
        """Test releases cannot be created under a deleted company."""
        client.delete(f"/company/{funded_company.uuid}", headers=auth_headers(customer))
        response = client.post("/pr", json={"company_id": funded_company.id}, headers=auth_headers(customer))
        assert response.status_code == 404


@pytest.mark.integration
class TestContacts:
    """Test suite for /company/{uuid}/contacts."""

    def test_single_primary_contact(self, client, db_session, customer, company) -> None:
        """Test marking a contact primary demotes the previous one."""
        headers = auth_headers(customer)
        first = client.post(f"/company/{company.uuid}/contacts",
                            json={"first_name": "Ann", "is_primary": True}, headers=headers)
        second = client.post(f"/company/{company.uuid}/contacts",
                             json={"first_name": "Ben", "is_primary": True}, headers=headers)
        assert first.status_code == 201
        assert second.status_code == 201

        contacts = client.get(f"/company/{company.uuid}/contacts", headers=headers).json()
        assert [(c["first_name"], c["is_primary"]) for c in contacts] == [("Ann", False), ("Ben", True)]

    def test_delete_contact(self, client, db_session, customer, company) -> None:
        headers = auth_headers(customer)
        contact = client.post(f"/company/{company.uuid}/contacts", json={"first_name": "Ann"}, headers=headers).json()

        assert client.delete(f"/company/{company.uuid}/contacts/{contact['uuid']}", headers=headers).status_code == 200
        assert db_session.query(Contact).count() == 0
        assert client.delete(f"/company/{company.uuid}/contacts/{contact['uuid']}", headers=headers).status_code == 404
