import asyncio
import logging
from contextlib import contextmanager
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union

import aiohttp
from starknet_py.constants import EC_ORDER
from starknet_py.hash.address import compute_address
from starknet_py.hash.selector import get_selector_from_name
from starknet_py.hash.utils import pedersen_hash
from starknet_py.net.account.account import Account
from starknet_py.net.client_errors import ClientError
from starknet_py.net.client_models import Call, SentTransactionResponse
from starknet_py.net.full_node_client import FullNodeClient
from starknet_py.net.signer.stark_curve_signer import KeyPair

from token_sender.artifacts import CasmArtifact, SierraArtifact
from token_sender.config import Config
from token_sender.errors import ConfigError, NetworkError, SubmissionError
from token_sender.utils import int_16

logger = logging.getLogger(__name__)

UNIVERSAL_DEPLOYER_ADDRESS = int_16(
    "0x041a78e741e5af2fec34b695679bc6891742439f7afb8484ecd7766661ad02bf"
)

TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


class DeclareResult(NamedTuple):
    class_hash: int
    transaction_hash: int


class DeployResult(NamedTuple):
    contract_address: int
    transaction_hash: int


@contextmanager
def network_step(step: str, subject: str, error_cls=NetworkError) -> Iterator[None]:
    """
    Translates RPC and transport failures raised inside the block into error_cls.
    """
    try:
        yield
    except ClientError as err:
        raise error_cls(f"rejected by node: {err.message}", step=step, subject=subject) from err
    except TRANSPORT_ERRORS as err:
        raise NetworkError(
            f"node unreachable: {err or type(err).__name__}", step=step, subject=subject
        ) from err


class AccountHandle:
    """
    A signing account bound to one node, ready to submit transactions.

    Nonces are read at block_tag ("pending" unless configured otherwise), so transactions
    already in the pending block are accounted for.
    """

    def __init__(self, account: Account, chain_id: int, block_tag: str):
        self.account = account
        self.chain_id = chain_id
        self.block_tag = block_tag
        self._submitted = False

    @property
    def address(self) -> int:
        return self.account.address

    @property
    def client(self):
        return self.account.client

    def _start_submission(self):
        if self._submitted:
            raise SubmissionError(
                "an account handle submits at most one transaction",
                step="submit",
                subject=hex(self.address),
            )
        self._submitted = True

    async def get_nonce(self) -> int:
        with network_step("fetch nonce", hex(self.address)):
            return await self.account.get_nonce(block_number=self.block_tag)

    async def execute(self, calls: Union[Call, Sequence[Call]]) -> SentTransactionResponse:
        calls = [calls] if isinstance(calls, Call) else list(calls)
        self._start_submission()
        nonce = await self.get_nonce()
        logger.info("Executing %d call(s) from %s, nonce %d", len(calls), hex(self.address), nonce)
        with network_step("execute", hex(self.address), SubmissionError):
            return await self.account.execute_v3(calls=calls, nonce=nonce, auto_estimate=True)

    async def declare(self, sierra: SierraArtifact, casm: CasmArtifact) -> DeclareResult:
        self._start_submission()
        nonce = await self.get_nonce()
        logger.info("Declaring class %s, nonce %d", hex(sierra.class_hash), nonce)
        with network_step("declare", sierra.path, SubmissionError):
            declare_tx = await self.account.sign_declare_v3(
                compiled_contract=sierra.compiled_contract,
                compiled_class_hash=casm.class_hash,
                nonce=nonce,
                auto_estimate=True,
            )
            response = await self.client.declare(transaction=declare_tx)
        return DeclareResult(class_hash=response.class_hash, transaction_hash=response.transaction_hash)

    async def deploy(
        self,
        class_hash: int,
        constructor_calldata: List[int],
        salt: int,
        unique: bool = False,
        deployer_address: int = UNIVERSAL_DEPLOYER_ADDRESS,
    ) -> DeployResult:
        deploy_call, contract_address = get_udc_deployment(
            class_hash=class_hash,
            constructor_calldata=constructor_calldata,
            salt=salt,
            unique=unique,
            account_address=self.address,
            deployer_address=deployer_address,
        )
        response = await self.execute([deploy_call])
        return DeployResult(
            contract_address=contract_address, transaction_hash=response.transaction_hash
        )


def get_udc_deployment(
    class_hash: int,
    constructor_calldata: List[int],
    salt: int,
    unique: bool,
    account_address: int,
    deployer_address: int = UNIVERSAL_DEPLOYER_ADDRESS,
) -> Tuple[Call, int]:
    """
    Builds the deployContract call on the Universal Deployer and the address the new
    contract will get. A unique deployment mixes the deploying account into the salt.
    """
    deploy_call = Call(
        to_addr=deployer_address,
        selector=get_selector_from_name("deployContract"),
        calldata=[
            class_hash,
            salt,
            int(unique),
            len(constructor_calldata),
            *constructor_calldata,
        ],
    )
    contract_address = compute_address(
        class_hash=class_hash,
        constructor_calldata=constructor_calldata,
        salt=pedersen_hash(account_address, salt) if unique else salt,
        deployer_address=deployer_address if unique else 0,
    )
    return deploy_call, contract_address


def get_full_node_client(rpc_url: str) -> FullNodeClient:
    return FullNodeClient(node_url=rpc_url)


async def get_chain_id(client: FullNodeClient, rpc_url: str) -> int:
    with network_step("fetch chain id", rpc_url):
        chain_id = await client.get_chain_id()
    return chain_id if isinstance(chain_id, int) else int_16(chain_id)


async def get_account_client(
    config: Config,
    address: Optional[int] = None,
    client: Optional[FullNodeClient] = None,
) -> AccountHandle:
    """
    Builds the signing account every command submits through. Performs one round trip to
    fetch the chain id, so an unreachable node fails here.
    """
    address = config.account_address if address is None else address
    if not 0 < config.private_key < EC_ORDER:
        raise ConfigError("PRIVATE_KEY is out of the signing key range", step="build account")
    key_pair = KeyPair.from_private_key(key=config.private_key)

    client = client or get_full_node_client(config.rpc_url)
    logger.info("Connecting to %s as %s", config.rpc_url, hex(address))
    chain_id = await get_chain_id(client, config.rpc_url)
    logger.info("Chain id %s, evaluating nonces against the %s block", hex(chain_id), config.block_tag)

    account = Account(client=client, address=address, key_pair=key_pair, chain=chain_id)
    return AccountHandle(
        account=account, chain_id=chain_id, block_tag=config.block_tag
    )
