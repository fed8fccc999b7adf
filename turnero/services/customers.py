from __future__ import annotations

import logging

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from turnero.models.customer import Customer

logger = logging.getLogger(__name__)


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def _insert_if_absent_statement(db: Session, values: dict):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        insert = postgresql.insert
    elif dialect == "sqlite":
        insert = sqlite.insert
    else:
        raise RuntimeError(f"Unsupported dialect for customer upsert: {dialect}")
    return insert(Customer).values(**values).on_conflict_do_nothing(index_elements=["tenant_id", "email"])


def get_or_create_customer(
    db: Session,
    *,
    tenant_id: int,
    name: str,
    email: str,
    phone: str | None = None,
) -> Customer:
    """Customer for (email, tenant), inserted atomically if it does not exist yet.

    An existing record is reused as is; name and phone are only used on insert.
    """
    normalized_email = normalize_email(email)
    statement = _insert_if_absent_statement(
        db,
        {
            "tenant_id": tenant_id,
            "name": (name or "").strip(),
            "email": normalized_email,
            "phone": (phone or "").strip(),
        },
    )
    result = db.execute(statement)
    if result.rowcount:
        logger.info("Customer created tenant_id=%s email=%s", tenant_id, normalized_email)

    return (
        db.query(Customer)
        .filter(Customer.tenant_id == tenant_id, Customer.email == normalized_email)
        .one()
    )
