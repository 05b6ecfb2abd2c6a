from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from realstat.app import create_app
from realstat.core.series import SeriesGenerator
from realstat.core.settings import Settings


@pytest.fixture()
def settings() -> Settings:
    return Settings(app_name="Realstat Test", series_seed=42, log_level="WARNING")


@pytest.fixture()
def app(settings: Settings) -> Flask:
    return create_app(settings)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def generator() -> SeriesGenerator:
    return SeriesGenerator(seed=1234)
