"""Schema creation and seed data.

Run with: python -m contentdesk.seed
Or automatically on startup when SEED_ON_STARTUP=true
"""

from __future__ import annotations

import asyncio
import logging
import os

from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from contentdesk.core.auth import hash_password, normalize_email
from contentdesk.core.rbac.catalog import PERMISSIONS, SYSTEM_ROLES
from contentdesk.logging_config import configure_logging
from contentdesk.models import BaseModel, Permission, Role, User

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_NAME = "Admin User"


def sqlalchemy_url(dsn: str) -> str:
    """Point a plain postgresql:// DSN at the asyncpg driver."""
    for prefix in ("postgresql://", "postgres://"):
        if dsn.startswith(prefix):
            return "postgresql+asyncpg://" + dsn[len(prefix) :]
    return dsn


async def create_schema(engine: AsyncEngine) -> None:
    """Create any missing tables."""
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)


async def seed_permissions(session: AsyncSession) -> int:
    """Insert catalog permissions that are not present yet.

    Returns:
        Number of permissions inserted.
    """
    result = await session.execute(select(Permission.slug))
    existing = set(result.scalars().all())

    added = 0
    for seed in PERMISSIONS:
        if seed.slug in existing:
            continue
        session.add(
            Permission(
                name=seed.name,
                slug=seed.slug,
                category=seed.category.value,
                description=seed.description,
            )
        )
        added += 1
    return added


async def seed_system_roles(session: AsyncSession) -> int:
    """Create the system roles, or restore their catalog permissions.

    Custom roles are never touched.

    Returns:
        Number of roles inserted.
    """
    slugs = [seed.slug for seed in SYSTEM_ROLES]
    result = await session.execute(select(Role).where(Role.slug.in_(slugs)))
    existing = {role.slug: role for role in result.scalars().all()}

    added = 0
    for seed in SYSTEM_ROLES:
        role = existing.get(seed.slug)
        if role is None:
            session.add(
                Role(
                    name=seed.name,
                    slug=seed.slug,
                    description=seed.description,
                    permissions=list(seed.permissions),
                    is_system=True,
                )
            )
            added += 1
            continue
        role.permissions = list(seed.permissions)
        role.is_system = True
    return added


async def seed_admin(
    session: AsyncSession,
    email: str,
    password: str,
    name: str = DEFAULT_ADMIN_NAME,
) -> bool:
    """Create the bootstrap admin account if the email is unused.

    Returns:
        True if the account was created.
    """
    email = normalize_email(email)
    result = await session.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none():
        logger.info("Admin user already exists, skipping")
        return False

    session.add(
        User(
            email=email,
            name=name,
            password_hash=hash_password(password),
            role="admin",
            status="active",
        )
    )
    return True


async def seed_database(
    session: AsyncSession,
    admin_email: str | None = None,
    admin_password: str | None = None,
    admin_name: str | None = None,
) -> None:
    """Seed the permission catalog, system roles and optional admin.

    Idempotent - safe to run multiple times.

    Args:
        session: SQLAlchemy async session.
        admin_email: Bootstrap admin email; skipped when unset.
        admin_password: Bootstrap admin password; skipped when unset.
        admin_name: Bootstrap admin display name.
    """
    logger.info("Seeding database...")

    permissions = await seed_permissions(session)
    roles = await seed_system_roles(session)

    admin_created = False
    if admin_email and admin_password:
        admin_created = await seed_admin(
            session, admin_email, admin_password, admin_name or DEFAULT_ADMIN_NAME
        )
    else:
        logger.info("ADMIN_EMAIL/ADMIN_PASSWORD not set, skipping admin user")

    await session.commit()

    logger.info("Database seeded successfully")
    logger.info(f"  Permissions added: {permissions}")
    logger.info(f"  System roles added: {roles}")
    if admin_created:
        logger.info(f"  Admin user: {normalize_email(admin_email or '')}")


async def run_seed(
    database_url: str,
    admin_email: str | None = None,
    admin_password: str | None = None,
    admin_name: str | None = None,
) -> None:
    """Create the schema and seed it using a short-lived engine."""
    engine = create_async_engine(sqlalchemy_url(database_url))
    try:
        await create_schema(engine)
        async_session = async_sessionmaker(engine, expire_on_commit=False)
        async with async_session() as session:
            await seed_database(session, admin_email, admin_password, admin_name)
    finally:
        await engine.dispose()


def main() -> None:
    """Seed the database named by DATABASE_URL."""
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    asyncio.run(
        run_seed(
            os.getenv("DATABASE_URL", "postgresql://localhost:5432/contentdesk"),
            admin_email=os.getenv("ADMIN_EMAIL"),
            admin_password=os.getenv("ADMIN_PASSWORD"),
            admin_name=os.getenv("ADMIN_NAME"),
        )
    )


if __name__ == "__main__":
    main()
