from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from goal_tracker.app import create_app
from goal_tracker.config import Settings


@pytest.fixture()
def client() -> FlaskClient:
    app = create_app(Settings(monte_carlo_seed=1234, monte_carlo_iterations=200))
    with app.test_client() as test_client:
        yield test_client
