import os
import tempfile

import pytest
import pytest_asyncio

from libraryclient.aioclient import LibraryClient

from .utils import StubLibraryServer


@pytest.fixture(autouse=True)
def config_dir(monkeypatch):
    with tempfile.TemporaryDirectory() as d:
        monkeypatch.setenv('XDG_CONFIG_HOME', d)
        for name in list(os.environ):
            if name.startswith('LIBRARYCLIENT_'):
                monkeypatch.delenv(name)
        yield d


@pytest.fixture
def server():
    server = StubLibraryServer()
    server.start()
    try:
        yield server
    finally:
        server.stop()


@pytest_asyncio.fixture
async def client(server):
    async with await LibraryClient.create(url=server.url) as client:
        yield client
