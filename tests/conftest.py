# tests/conftest.py
import httpx
import pytest
import pytest_asyncio
from cryptography.fernet import Fernet

from anymessage.storage.sqlite_gateway import SQLiteDatabase
from anymessage.utils.security import FernetEncryptor

from fakes import FakeBillingService, build_app


@pytest_asyncio.fixture
async def database(tmp_path):
    db = SQLiteDatabase(str(tmp_path / "anymessage_test.sqlite3"))
    await db.initialize()
    yield db
    await db.teardown()


@pytest.fixture
def encryptor():
    return FernetEncryptor(Fernet.generate_key().decode("utf-8"))


@pytest.fixture
def billing():
    return FakeBillingService(active_customers={"cus_active"})


@pytest.fixture
def app(database, encryptor, billing):
    return build_app(database, encryptor, billing)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
