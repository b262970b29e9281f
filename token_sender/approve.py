from token_sender.calls import build_calls
from token_sender.config import Config
from token_sender.deploy_lib import get_account_client
from token_sender.manifest import load_manifest
from token_sender.utils import format_hash

APPROVE_TEMPLATE = "approve"


async def approve(config: Config):
    # Max allowance on each token for the token sender contract, in one transaction.
    calls = build_calls(load_manifest(config.manifest_path), APPROVE_TEMPLATE)
    account = await get_account_client(config)

    result = await account.execute(calls)
    print(f"Approved in Tx: {format_hash(result.transaction_hash)}")
    return result
