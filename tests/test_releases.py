"""
Tests for press release drafting, credit consumption and status transitions.
"""
import pytest

from conftest import auth_headers
from models.credits import BrandCredit
from models.log import Log
from models.release import Queue, Release
from utils import credits as ledger


def create_release(client, user, company, **fields):
    payload = {"company_id": company.id, "title": "Acme Launches Robot Arm", "body": "<p>Acme today announced</p>"}
    payload.update(fields)
    return client.post("/pr", json=payload, headers=auth_headers(user))


def release_by_uuid(db, release_uuid: str) -> Release:
    db.expire_all()
    return db.query(Release).filter(Release.uuid == release_uuid).one()


@pytest.mark.integration
class TestCreateRelease:
    """Test suite for POST /pr."""

    def test_consumes_one_credit(self, client, db_session, customer, funded_company) -> None:
        """Test creation starts a draft and debits exactly one credit."""
        response = create_release(client, customer, funded_company)
        assert response.status_code == 201
        body = response.json()

        release = release_by_uuid(db_session, body["uuid"])
        assert release.id == body["id"]
        assert release.status == "draftnxt"
        assert release.slug == "acme-launches-robot-arm"

        debit = db_session.query(BrandCredit).filter(BrandCredit.pr_id == release.id).one()
        assert debit.credits == -1
        assert ledger.available_credits(db_session, customer.id, funded_company.id) == 1
        assert ledger.company_balance(db_session, funded_company.id) == 2

    def test_no_credits(self, client, db_session, customer, company) -> None:
        """Test a user without credits gets a 402 and nothing is written."""
        response = create_release(client, customer, company)
        assert response.status_code == 402
        assert db_session.query(Release).count() == 0
        assert db_session.query(BrandCredit).count() == 0

    def test_credits_run_out(self, client, customer, funded_company) -> None:
        """Test the third release on a two-credit balance is refused."""
        assert create_release(client, customer, funded_company).status_code == 201
        assert create_release(client, customer, funded_company).status_code == 201
        assert create_release(client, customer, funded_company).status_code == 402

    def test_user_level_credits_cover_brand(self, client, db_session, customer, company) -> None:
        """Test user-level credits are used when the brand has none."""
        ledger.grant_credits(db_session, user_id=customer.id, credits=1)
        db_session.commit()

        assert create_release(client, customer, company).status_code == 201
        assert ledger.user_balance(db_session, customer.id) == 0

    def test_company_required(self, client, customer) -> None:
        """Test a release must name a company."""
        response = client.post("/pr", json={"title": "No brand"}, headers=auth_headers(customer))
        assert response.status_code == 400
        assert response.json()["detail"] == "Company is required"

    def test_foreign_company(self, client, other_customer, funded_company) -> None:
        """Test releases cannot be filed under someone else's company."""
        response = create_release(client, other_customer, funded_company)
        assert response.status_code == 404

    def test_audit_entry(self, client, db_session, customer, funded_company) -> None:
        """Test creation is audited."""
        create_release(client, customer, funded_company)
        assert db_session.query(Log).filter(Log.action == "RELEASE_CREATE").count() == 1


@pytest.mark.integration
class TestEditRelease:
    """Test suite for reading and editing drafts."""

    def test_list_and_detail(self, client, customer, other_customer, funded_company) -> None:
        """Test owners list and read their releases; others cannot."""
        release_uuid = create_release(client, customer, funded_company).json()["uuid"]

        listing = client.get("/pr", headers=auth_headers(customer)).json()
        assert [r["uuid"] for r in listing] == [release_uuid]

        detail = client.get(f"/pr/{release_uuid}", headers=auth_headers(customer))
        assert detail.status_code == 200
        assert detail.json()["queue"] is None
        assert detail.json()["notes"] == []

        assert client.get(f"/pr/{release_uuid}", headers=auth_headers(other_customer)).status_code == 403

    def test_update_draft(self, client, customer, funded_company) -> None:
        """Test a draft's content can be changed and the slug follows the title."""
        release_uuid = create_release(client, customer, funded_company).json()["uuid"]
        response = client.put(
            f"/pr/{release_uuid}",
            json={"title": "Acme Ships Robot Arm", "location": "Austin, TX"},
            headers=auth_headers(customer),
        )
        assert response.status_code == 200
        assert response.json()["slug"] == "acme-ships-robot-arm"
        assert response.json()["location"] == "Austin, TX"

    def test_update_locked(self, client, customer, funded_company) -> None:
        """Test a release under review cannot be edited."""
        release_uuid = create_release(client, customer, funded_company).json()["uuid"]
        client.post(f"/pr/{release_uuid}/finalize", headers=auth_headers(customer))

        response = client.put(f"/pr/{release_uuid}", json={"title": "Too late"}, headers=auth_headers(customer))
        assert response.status_code == 409


@pytest.mark.integration
class TestTransitions:
    """Test suite for finalize, retract and delete."""

    def test_finalize_enqueues(self, client, db_session, customer, funded_company) -> None:
        """Test submission moves the release to editorial with a queue entry."""
        release_uuid = create_release(client, customer, funded_company).json()["uuid"]
        response = client.post(f"/pr/{release_uuid}/finalize", headers=auth_headers(customer))
        assert response.status_code == 200

        release = release_by_uuid(db_session, release_uuid)
        assert release.status == "editorial"
        entry = db_session.query(Queue).filter(Queue.release_id == release.id).one()
        assert entry.submitted is not None
        assert entry.checkedout is None

    def test_finalize_twice(self, client, customer, funded_company) -> None:
        """Test a release cannot be submitted while already in review."""
        release_uuid = create_release(client, customer, funded_company).json()["uuid"]
        client.post(f"/pr/{release_uuid}/finalize", headers=auth_headers(customer))
        response = client.post(f"/pr/{release_uuid}/finalize", headers=auth_headers(customer))
        assert response.status_code == 409

    def test_retract(self, client, db_session, customer, funded_company) -> None:
        """Test the owner can pull a release back before an editor takes it."""
        release_uuid = create_release(client, customer, funded_company).json()["uuid"]
        client.post(f"/pr/{release_uuid}/finalize", headers=auth_headers(customer))

        response = client.post(f"/pr/{release_uuid}/retract", headers=auth_headers(customer))
        assert response.status_code == 200

        release = release_by_uuid(db_session, release_uuid)
        assert release.status == "draftnxt"
        assert db_session.query(Queue).count() == 0

    def test_retract_while_checked_out(self, client, db_session, customer, funded_company) -> None:
        """Test a release held by an editor cannot be retracted."""
        release_uuid = create_release(client, customer, funded_company).json()["uuid"]
        client.post(f"/pr/{release_uuid}/finalize", headers=auth_headers(customer))
        entry = db_session.query(Queue).one()
        entry.checkedout = entry.submitted
        db_session.commit()

        response = client.post(f"/pr/{release_uuid}/retract", headers=auth_headers(customer))
        assert response.status_code == 409
        assert release_by_uuid(db_session, release_uuid).status == "editorial"

    def test_retract_draft(self, client, customer, funded_company) -> None:
        """Test only releases in review can be retracted."""
        release_uuid = create_release(client, customer, funded_company).json()["uuid"]
        response = client.post(f"/pr/{release_uuid}/retract", headers=auth_headers(customer))
        assert response.status_code == 409

    def test_delete_restores_credit(self, client, db_session, customer, funded_company) -> None:
        """Test deleting a draft hides it and hands the credit back."""
        release_uuid = create_release(client, customer, funded_company).json()["uuid"]
        assert ledger.available_credits(db_session, customer.id, funded_company.id) == 1

        response = client.post(f"/pr/{release_uuid}/delete", headers=auth_headers(customer))
        assert response.status_code == 200

        assert release_by_uuid(db_session, release_uuid).is_deleted is True
        assert ledger.available_credits(db_session, customer.id, funded_company.id) == 2
        assert client.get("/pr", headers=auth_headers(customer)).json() == []
        assert client.get(f"/pr/{release_uuid}", headers=auth_headers(customer)).status_code == 404

    @pytest.mark.parametrize("status", ["editorial", "approved", "sent"])
    def test_delete_protected(self, client, db_session, customer, funded_company, status: str) -> None:
        """Test releases in review or published keep their credit and row."""
        release_uuid = create_release(client, customer, funded_company).json()["uuid"]
        release = release_by_uuid(db_session, release_uuid)
        release.status = status
        db_session.commit()

        response = client.post(f"/pr/{release_uuid}/delete", headers=auth_headers(customer))
        assert response.status_code == 409
        assert release_by_uuid(db_session, release_uuid).is_deleted is False
        assert ledger.available_credits(db_session, customer.id, funded_company.id) == 1

    def test_delete_by_stranger(self, client, customer, other_customer, funded_company) -> None:
        """Test only the owner may delete."""
        release_uuid = create_release(client, customer, funded_company).json()["uuid"]
        response = client.post(f"/pr/{release_uuid}/delete", headers=auth_headers(other_customer))
        assert response.status_code == 403


@pytest.mark.integration
class TestApplyEdit:
    """Test suite for POST /pr/{uuid}/apply-edit."""

    def test_replaces_across_tags(self, client, db_session, customer, funded_company) -> None:
        """Test a plain-text suggestion is applied to tagged body text."""
        release_uuid = create_release(
            client, customer, funded_company, body="<p>Acme <strong>today</strong> announced a robot.</p>"
        ).json()["uuid"]

        response = client.post(
            f"/pr/{release_uuid}/apply-edit",
            json={"original_text": "Acme today announced", "improved_text": "Acme announced today"},
            headers=auth_headers(customer),
        )
        assert response.status_code == 200
        assert release_by_uuid(db_session, release_uuid).body == "<p>Acme announced today a robot.</p>"

    def test_text_not_found(self, client, customer, funded_company) -> None:
        """Test a suggestion that matches nothing is a 400."""
        release_uuid = create_release(client, customer, funded_company).json()["uuid"]
        response = client.post(
            f"/pr/{release_uuid}/apply-edit",
            json={"original_text": "nowhere to be seen", "improved_text": "x"},
            headers=auth_headers(customer),
        )
        assert response.status_code == 400

    def test_missing_fields(self, client, customer, funded_company) -> None:
        """Test both texts are required."""
        release_uuid = create_release(client, customer, funded_company).json()["uuid"]
        response = client.post(
            f"/pr/{release_uuid}/apply-edit", json={"original_text": "Acme"}, headers=auth_headers(customer)
        )
        assert response.status_code == 400

    def test_locked_release(self, client, customer, funded_company) -> None:
        """Test suggestions cannot change a release under review."""
        release_uuid = create_release(client, customer, funded_company).json()["uuid"]
        client.post(f"/pr/{release_uuid}/finalize", headers=auth_headers(customer))
        response = client.post(
            f"/pr/{release_uuid}/apply-edit",
            json={"original_text": "Acme", "improved_text": "ACME"},
            headers=auth_headers(customer),
        )
        assert response.status_code == 409

    @pytest.mark.parametrize("original", [" ", "   ", "\n\t"])
    def test_whitespace_only_original(self, client, db_session, customer, funded_company, original) -> None:
        """Test whitespace-only text is refused and the body is left alone."""
        release_uuid = create_release(client, customer, funded_company, body="<p>Hello world</p>").json()["uuid"]
        response = client.post(
            f"/pr/{release_uuid}/apply-edit",
            json={"original_text": original, "improved_text": "X"},
            headers=auth_headers(customer),
        )
        assert response.status_code == 400
        assert release_by_uuid(db_session, release_uuid).body == "<p>Hello world</p>"
