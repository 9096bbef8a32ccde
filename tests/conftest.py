import pytest

from cloudvault import store
from cloudvault.app import create_app
from cloudvault.config import Config
from cloudvault.extensions import db
from cloudvault.object_store import ObjectStore
from tests._stubs import FakeS3Client

BUCKET = "test-bucket"
PASSWORD = "Str0ng!Pass"


class ConfigForTests(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-signing-key-that-is-long-enough-for-hs256"
    BCRYPT_LOG_ROUNDS = 4
    S3_BUCKET_NAME = BUCKET
    MAX_UPLOAD_BYTES = 1024
    MAX_CONTENT_LENGTH = 64 * 1024
    DOWNLOAD_URL_EXPIRES = 3600
    LOG_LEVEL = "DEBUG"


@pytest.fixture
def s3():
    return FakeS3Client()


@pytest.fixture
def app(s3):
    app = create_app(ConfigForTests, object_store=ObjectStore(s3, BUCKET))
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Create a user straight through the record store."""
    def _make(email="pat@example.com", name="Pat Smith", role="patient", specialty=None):
        return store.create_user({
            "name": name,
            "email": email,
            "password": PASSWORD,
            "role": role,
            "specialty": specialty,
        })
    return _make


@pytest.fixture
def auth_headers(client, make_user):
    """Register a user and return bearer headers for them."""
    def _headers(email="pat@example.com", **kwargs):
        make_user(email=email, **kwargs)
        res = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
        assert res.status_code == 200, res.get_json()
        return {"Authorization": f"Bearer {res.get_json()['token']}"}
    return _headers
