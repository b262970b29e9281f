import os
from typing import List, NamedTuple

from token_sender.deploy_lib import DeclareResult, DeployResult


FILE_DIR = os.path.dirname(__file__)
ARTIFACTS_DIR = os.path.join(FILE_DIR, "artifacts")
SIERRA_FILE = os.path.join(ARTIFACTS_DIR, "token_sender.sierra.json")
CASM_FILE = os.path.join(ARTIFACTS_DIR, "token_sender.casm.json")
HINTED_CASM_FILE = os.path.join(ARTIFACTS_DIR, "token_sender.hinted.casm.json")
TRUNCATED_FILE = os.path.join(ARTIFACTS_DIR, "truncated.json")

RPC_URL = "http://127.0.0.1:5050/rpc"
PRIVATE_KEY = "0x5ce311283aa15aa3dc58d99fe122cdaa389615e7d800f98fab238c5a7c8d624"
ACCOUNT_ADDRESS = "0x54b9b1b06e7110f1ef0b0c3467610438311da4680d3c75d557b52788591741"
SEPOLIA_CHAIN_ID = "0x534e5f5345504f4c4941"
TX_HASH = 0x7A1B2C3D4E5F


class FakeResponse(NamedTuple):
    transaction_hash: int


class FakeClient:
    """
    Stands in for FullNodeClient. chain_id may be an exception instance to simulate an
    unreachable node.
    """

    def __init__(self, chain_id=SEPOLIA_CHAIN_ID):
        self.chain_id = chain_id
        self.requests: List[str] = []

    async def get_chain_id(self):
        self.requests.append("chainId")
        if isinstance(self.chain_id, Exception):
            raise self.chain_id
        return self.chain_id


class FakeAccountHandle:
    """
    Records what a command submits instead of talking to a node.
    """

    def __init__(self, error: Exception = None, address: int = int(ACCOUNT_ADDRESS, 16)):
        self.error = error
        self.address = address
        self.executed: List[list] = []
        self.declared: List[tuple] = []
        self.deployed: List[dict] = []

    def _maybe_fail(self):
        if self.error is not None:
            raise self.error

    async def execute(self, calls):
        self.executed.append(list(calls))
        self._maybe_fail()
        return FakeResponse(transaction_hash=TX_HASH)

    async def declare(self, sierra, casm):
        self.declared.append((sierra, casm))
        self._maybe_fail()
        return DeclareResult(class_hash=sierra.class_hash, transaction_hash=TX_HASH)

    async def deploy(self, **kwargs):
        self.deployed.append(kwargs)
        self._maybe_fail()
        return DeployResult(contract_address=0xC0FFEE, transaction_hash=TX_HASH)


def write_env(directory, **overrides) -> str:
    values = {
        "STARKNET_RPC_URL": RPC_URL,
        "PRIVATE_KEY": PRIVATE_KEY,
        "ACCOUNT_ADDRESS": ACCOUNT_ADDRESS,
    }
    values.update(overrides)
    path = os.path.join(str(directory), ".env")
    with open(path, "w") as env_file:
        for key, value in values.items():
            if value is not None:
                env_file.write(f"{key}={value}\n")
    return path
