import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from invoicedesk.db import get_db, make_engine
from invoicedesk.main import app
from invoicedesk.models import Base, Company, CompanyTypeEnum, Profile


@pytest.fixture()
def engine(tmp_path):
    db_path = tmp_path / "test.db"
    engine = make_engine(f"sqlite+pysqlite:///{db_path}")
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture()
def SessionLocal(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(SessionLocal):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(SessionLocal):
    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def admin(db_session):
    # Stored with legacy casing on purpose.
    profile = Profile(email="admin@example.com", role="Admin")
    db_session.add(profile)
    db_session.commit()
    return profile


@pytest.fixture()
def user(db_session):
    profile = Profile(email="clerk@example.com", role="user")
    db_session.add(profile)
    db_session.commit()
    return profile


@pytest.fixture()
def admin_headers(admin):
    return {"X-User-Email": admin.email}


@pytest.fixture()
def user_headers(user):
    return {"X-User-Email": user.email}


@pytest.fixture()
def supplier(db_session):
    company = Company(code="SUP1", name="Acme Supplies", type=CompanyTypeEnum.SUPPLIER)
    db_session.add(company)
    db_session.commit()
    return company
