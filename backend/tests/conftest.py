import pytest
from fastapi.testclient import TestClient

from fxhedge.core.config import Settings
from fxhedge.main import create_app
from fxhedge.schemas.market import MarketContext


@pytest.fixture()
def client():
    app = create_app(Settings())
    return TestClient(app)


@pytest.fixture()
def eurusd():
    return MarketContext(spot=1.08, maturity=1.0, domestic_rate=0.02, foreign_rate=0.03)
