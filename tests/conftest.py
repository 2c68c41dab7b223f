import pytest

from local_fileserver.app import create_app
from local_fileserver.config import Config


@pytest.fixture
def root(tmp_path):
    served = tmp_path / "served"
    served.mkdir()
    return served


@pytest.fixture
def config(root):
    return Config(root=str(root))


@pytest.fixture
def app(config):
    app = create_app(config)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
