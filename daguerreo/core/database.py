from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from daguerreo.core.config import settings
from daguerreo.utils.helpers import logger

_is_sqlite = settings.DATABASE_URL.startswith("sqlite")

# Create synchronous engine
if _is_sqlite:
    engine = create_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        connect_args={"check_same_thread": False}
    )
else:
    engine = create_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=10,
        max_overflow=20
    )

# Create session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# Create base class for models
Base = declarative_base()

def get_db() -> Session:
    """Dependency to get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db(bind=None):
    """Create any tables registered on Base that do not exist yet"""
    bind = bind or engine
    # Import models so they register with Base.metadata
    from daguerreo import models  # noqa: F401

    inspector = inspect(bind)
    existing_tables = set(inspector.get_table_names())
    missing_tables = [name for name in Base.metadata.tables if name not in existing_tables]

    Base.metadata.create_all(bind=bind)
    if missing_tables:
        logger.info(f"Created missing tables: {missing_tables}")
    else:
        logger.info("All required tables already exist")

def close_db():
    """Close database connection"""
    engine.dispose()
