import logging

from token_sender.calls import build_calls
from token_sender.config import Config
from token_sender.deploy_lib import get_account_client
from token_sender.errors import NetworkError, SubmissionError
from token_sender.manifest import load_manifest

logger = logging.getLogger(__name__)

MULTISEND_TEMPLATE = "multisend"


async def multisend(config: Config):
    """
    Sends the multisend batch and prints whatever the node answered.

    Unlike the other commands, a failed submission is reported as the result rather than
    raised, so the process still exits 0. Config and connection failures still abort.
    """
    calls = build_calls(load_manifest(config.manifest_path), MULTISEND_TEMPLATE)
    account = await get_account_client(config)

    try:
        result = await account.execute(calls)
    except (SubmissionError, NetworkError) as err:
        logger.warning("Multisend submission failed: %s", err)
        print(f"Result Error: {err}")
        return err
    print(f"Result {result}")
    return result
