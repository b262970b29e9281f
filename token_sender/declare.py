from token_sender.artifacts import load_casm_artifact, load_sierra_artifact
from token_sender.config import Config
from token_sender.deploy_lib import get_account_client
from token_sender.utils import format_hash


async def declare(config: Config, sierra_file_path: str, casm_file_path: str):
    """
    Registers the class in sierra_file_path on chain, paired with the compiled class hash
    of casm_file_path. Signs with the declarer account.
    """
    account = await get_account_client(config, address=config.declarer_address)

    # Sierra class artifact, as produced by starknet-compile.
    sierra = load_sierra_artifact(sierra_file_path)
    print(f"Contract Hash: {format_hash(sierra.class_hash)}")
    casm = load_casm_artifact(casm_file_path)

    result = await account.declare(sierra, casm)
    print(f"Declared in Tx: {format_hash(result.transaction_hash)}")
    return result
