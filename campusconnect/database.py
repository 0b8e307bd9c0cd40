from typing import AsyncGenerator

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from campusconnect.config import settings

# Async engine
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    future=True,
)

# Async session factory
async_session = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autocommit=False, autoflush=False
)

# Declarative base
Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one async session per request
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """
    Create tables at application startup
    """
    # Import models so every table is registered on Base.metadata
    import campusconnect.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if settings.SEED_SAMPLE_DATA:
        async with async_session() as session:
            await insert_sample_data(session)


async def insert_sample_data(session: AsyncSession) -> None:
    """Insert two sample organizations with a few listings into an empty database"""
    from campusconnect.core.security import get_password_hash
    from campusconnect.models import Equipment, Organization, Service

    count = await session.execute(select(func.count()).select_from(Organization))
    if count.scalar():
        return

    tech = Organization(
        name="Tech Society",
        username="techsociety",
        password=get_password_hash("password123"),
        description="We are a society focused on technology and innovation.",
    )
    design = Organization(
        name="Design Club",
        username="designclub",
        password=get_password_hash("password123"),
        description="A creative club focused on design thinking and visual arts.",
    )
    session.add_all([tech, design])
    await session.flush()

    session.add_all([
        Service(
            organization_id=tech.id,
            title="Web Development Workshop",
            description="A workshop on modern web development practices, covering HTML, CSS, JavaScript and responsive design.",
            service_type="Technical",
            pricing="free",
            availability="Available on request",
        ),
        Service(
            organization_id=tech.id,
            title="Digital Marketing Strategy",
            description="Marketing consultation for student societies looking to grow their digital presence.",
            service_type="Marketing",
            pricing="paid",
            price=20,
            availability="Available on weekends",
        ),
        Equipment(
            organization_id=tech.id,
            name="DSLR Camera",
            description="Canon EOS 5D Mark IV with 24-70mm lens",
        ),
        Equipment(
            organization_id=tech.id,
            name="Sound System",
            description="Complete PA system with mixer, speakers and microphones",
        ),
    ])
    await session.commit()
