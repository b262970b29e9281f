import logging

from token_sender.artifacts import load_sierra_artifact
from token_sender.config import Config
from token_sender.deploy_lib import get_account_client
from token_sender.errors import ManifestError
from token_sender.manifest import load_manifest
from token_sender.utils import format_hash

logger = logging.getLogger(__name__)


async def deploy(config: Config):
    """
    Deploys an instance of the manifest's deploy artifact through the Universal Deployer.
    The class must already be declared.
    """
    manifest = load_manifest(config.manifest_path)
    if manifest.deploy is None:
        raise ManifestError("manifest has no deploy section", step="deploy")
    spec = manifest.deploy
    constructor_calldata = manifest.resolve_calldata(spec.constructor_calldata)

    account = await get_account_client(config)

    class_hash = load_sierra_artifact(spec.artifact).class_hash
    print(f"Contract Hash: {format_hash(class_hash)}")

    logger.info("Deploying with salt %d, unique=%s", spec.salt, spec.unique)
    result = await account.deploy(
        class_hash=class_hash,
        constructor_calldata=constructor_calldata,
        salt=spec.salt,
        unique=spec.unique,
    )
    print(f"Contract Address: {format_hash(result.contract_address)}")
    print(f"Deploy in Tx: {format_hash(result.transaction_hash)}")
    return result
