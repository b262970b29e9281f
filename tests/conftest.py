import pytest

from token_sender.config import Config
from utils import ACCOUNT_ADDRESS, PRIVATE_KEY, RPC_URL, FakeAccountHandle, FakeClient


@pytest.fixture
def config() -> Config:
    return Config(
        rpc_url=RPC_URL,
        private_key=int(PRIVATE_KEY, 16),
        account_address=int(ACCOUNT_ADDRESS, 16),
        declarer_address=0x5465AA79114F0415F95100CAFEB4640B17BCE2653810903738AC6C1A7694B6C,
    )


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def fake_account() -> FakeAccountHandle:
    return FakeAccountHandle()


@pytest.fixture
def patch_account(monkeypatch):
    """
    Replaces get_account_client in a command module; returns the recorded addresses.
    """
    requested = []

    def _patch(module, handle):
        async def _get_account_client(config, address=None, client=None):
            requested.append(config.account_address if address is None else address)
            return handle

        monkeypatch.setattr(module, "get_account_client", _get_account_client)
        return requested

    return _patch
