"""Shared fixtures"""

import pytest

from echo_server import BASE_URI, mount_echo
from request_client import RequestClient


@pytest.fixture
def echo_client():
    client = RequestClient.set_base_uri(BASE_URI)
    adapter = mount_echo(client)
    with client:
        yield client, adapter
