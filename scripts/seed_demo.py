#!/usr/bin/env python3
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from turnero.core.config import IS_DEV  # noqa: E402
from turnero.core.database import Base, SessionLocal, engine  # noqa: E402
from turnero.core.logging_setup import configure_logging  # noqa: E402
import turnero.models  # noqa: E402,F401
from turnero.services.admin_bootstrap import upsert_admin_user  # noqa: E402
from turnero.services.demo_seed import seed_demo_tenants  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Carga los negocios de demostración.")
    parser.add_argument("--admin-email", default=os.getenv("SEED_ADMIN_EMAIL", ""), help="Email del admin dueño")
    parser.add_argument("--admin-password", default=os.getenv("SEED_ADMIN_PASSWORD", ""), help="Contraseña del admin")
    parser.add_argument("--admin-name", default="Dueño", help="Nombre del admin")
    parser.add_argument(
        "--create-schema",
        action="store_true",
        help="Crea las tablas directamente (solo SQLite de desarrollo)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    configure_logging()

    if args.create_schema:
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        tenants = seed_demo_tenants(db)
        for tenant in tenants:
            print(f"Negocio listo: {tenant.slug} (id={tenant.id})")

        if args.admin_email:
            if not args.admin_password:
                print("Falta --admin-password para crear el admin.")
                return 1
            for tenant in tenants:
                admin, created = upsert_admin_user(
                    db,
                    tenant_id=tenant.id,
                    email=args.admin_email,
                    name=args.admin_name,
                    password=args.admin_password,
                )
                action = "creado" if created else "actualizado"
                print(f"Admin {action}: tenant={tenant.slug} email={admin.email}")
                if IS_DEV:
                    print(f"Resumen DEV -> Negocio: {tenant.slug} | Email: {admin.email} | Clave: {args.admin_password}")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
