import os
import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

# Pas de Postgres pendant les tests
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"
os.environ.setdefault("DATABASE_URL", SQLALCHEMY_TEST_DATABASE_URL)

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Créer engine SQLite pour tests AVANT d'importer app
test_engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# PATCH: remplacer le engine et SessionLocal du core.database AVANT d'importer app
import linkpage.core.database
linkpage.core.database.engine = test_engine
linkpage.core.database.SessionLocal = TestingSessionLocal

# Maintenant importer app (qui utilisera notre engine SQLite)
from linkpage.core.database import Base
from linkpage.main import app
from linkpage.routers.pages import get_store
from linkpage.services.address import AddressResolver
from linkpage.services.clipboard import MemoryClipboard
from linkpage.services.local_cache import MemoryCache
from linkpage.services.notices import NoticeBoard
from linkpage.services.page_session import PageSessionController
from linkpage.services.store import SqlRemoteStore

BASE_URL = "http://localhost:5173/"


class FakeClock:
    """Horloge manuelle (secondes)"""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)

# Override la dépendance
app.dependency_overrides[get_store] = lambda: SqlRemoteStore(TestingSessionLocal)


@pytest.fixture
def client():
    """Client de test FastAPI"""
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def store():
    """Store distant sur la base SQLite de test"""
    return SqlRemoteStore(TestingSessionLocal)


@pytest.fixture
def cache():
    return MemoryCache()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_controller(cache, clock):
    """Construit un contrôleur branché sur des ports en mémoire"""
    def _make(store, fragment: str = "", cache=cache):
        return PageSessionController(
            store,
            cache,
            MemoryClipboard(),
            AddressResolver(fragment),
            notices=NoticeBoard(duration=3, clock=clock),
            public_base_url=BASE_URL,
            clock=clock,
        )
    return _make
