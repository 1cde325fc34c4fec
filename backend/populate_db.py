import os
import sys
import uuid
import logging

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from dotenv import load_dotenv

load_dotenv()

from config import settings
from database import SessionLocal, init_db
from models.users import User, UserSubscription
from models.company import Company, Contact
from models.product import Product
from utils.credits import grant_credits
from utils.tokenJWT import create_access_token

logger = logging.getLogger("populate_db")

# Configuration
PARTNER_ID = settings.DEFAULT_PARTNER_ID

USERS = [
    {"email": "admin@newsworthy.local", "first_name": "Ada", "last_name": "Admin", "is_admin": True},
    {"email": "editor@newsworthy.local", "first_name": "Eli", "last_name": "Editor", "is_editor": True},
    {"email": "customer@newsworthy.local", "first_name": "Casey", "last_name": "Client"},
]

# Default catalog: (short_name, display_name, price in cents, product_type, credits, label)
CATALOG = [
    ("pr1", "Single Press Release", 1500, "pr", 1, None),
    ("pr5", "5 Press Release Bundle", 5000, "pr", 5, "Popular"),
    ("pr10", "10 Press Release Bundle", 9000, "pr", 10, "Best value"),
    ("plus1", "Enhanced Distribution", 2500, "enhanced", 1, None),
    ("newsdb100", "Media Database 100", 4900, "newsdb", 100, None),
]
# End Configuration


def get_or_create_user(session, data):
    user = session.query(User).filter(User.email == data["email"]).first()
    if user:
        return user, False
    user = User(partner_id=PARTNER_ID, **data)
    session.add(user)
    session.flush()
    session.add(UserSubscription(user_id=user.id, name="Pay as you go"))
    return user, True


def seed_catalog(session, admin):
    created = 0
    for short_name, display_name, price, product_type, credits, label in CATALOG:
        exists = session.query(Product).filter(
            Product.partner_id == PARTNER_ID,
            Product.short_name == short_name,
        ).first()
        if exists:
            continue
        session.add(Product(
            partner_id=PARTNER_ID,
            user_id=admin.id,
            short_name=short_name,
            display_name=display_name,
            description=f"{display_name} ({credits} {product_type})",
            label=label,
            price=price,
            product_type=product_type,
            product_credits=credits,
            is_active=True,
            is_upgrade=product_type == "enhanced",
        ))
        created += 1
    return created


def seed_company(session, owner):
    company = session.query(Company).filter(
        Company.user_id == owner.id, Company.is_deleted == False
    ).first()
    if company:
        return company, False

    company = Company(
        uuid=str(uuid.uuid4()),
        user_id=owner.id,
        company_name="Acme Robotics",
        first_name=owner.first_name,
        last_name=owner.last_name,
        title="Head of Communications",
        website="https://acme.example",
        email=owner.email,
        city="Austin",
        state="TX",
        country_code="US",
    )
    session.add(company)
    session.flush()
    session.add(Contact(
        uuid=str(uuid.uuid4()),
        company_id=company.id,
        user_id=owner.id,
        first_name=owner.first_name,
        last_name=owner.last_name,
        email=owner.email,
        is_primary=True,
    ))
    return company, True


def main():
    init_db()
    session = SessionLocal()
    try:
        users = {}
        for data in USERS:
            user, created = get_or_create_user(session, data)
            users[user.email] = user
            if created:
                logger.info("Created user %s", user.email)

        admin = users["admin@newsworthy.local"]
        customer = users["customer@newsworthy.local"]

        added = seed_catalog(session, admin)
        logger.info("Catalog: %d product(s) added", added)

        company, created = seed_company(session, customer)
        if created:
            # Starter credits so the customer can draft a release right away
            grant_credits(
                session,
                user_id=customer.id,
                company_id=company.id,
                credits=2,
                notes="Welcome credits",
            )
            logger.info("Created company %s (%s)", company.company_name, company.uuid)

        session.commit()

        # Development tokens; the dashboard normally issues these
        for email in users:
            print(f"{email}: {create_access_token({'sub': email})}")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    main()
