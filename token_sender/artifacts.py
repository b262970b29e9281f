import json
import logging
from typing import NamedTuple

from marshmallow import ValidationError
from starknet_py.common import create_casm_class, create_sierra_compiled_contract
from starknet_py.hash.casm_class_hash import compute_casm_class_hash
from starknet_py.hash.sierra_class_hash import compute_sierra_class_hash
from starknet_py.net.client_models import SierraContractClass

from token_sender.errors import ArtifactError

logger = logging.getLogger(__name__)

ARTIFACT_PARSE_ERRORS = (ValueError, TypeError, KeyError, ValidationError)


class SierraArtifact(NamedTuple):
    path: str
    # Raw JSON text, which is what the account signs a declare from.
    compiled_contract: str
    # Flattened form: the ABI is serialized to a string, as the network expects it.
    contract_class: SierraContractClass
    class_hash: int


class CasmArtifact(NamedTuple):
    path: str
    class_hash: int


def read_artifact(path: str) -> str:
    try:
        with open(path) as artifact_file:
            return artifact_file.read()
    except OSError as err:
        raise ArtifactError(str(err), step="read artifact", subject=path) from err


def load_sierra_artifact(path: str) -> SierraArtifact:
    """
    Loads a Sierra contract class (the starknet-compile / scarb output) and computes
    its class hash.
    """
    compiled_contract = read_artifact(path)
    try:
        contract_class = create_sierra_compiled_contract(
            compiled_contract=compiled_contract
        ).convert_to_sierra_contract_class()
        class_hash = compute_sierra_class_hash(contract_class)
    except ARTIFACT_PARSE_ERRORS as err:
        raise ArtifactError(
            f"not a valid Sierra contract class: {err}", step="parse artifact", subject=path
        ) from err
    logger.info("Loaded Sierra class %s from %s", hex(class_hash), path)
    return SierraArtifact(
        path=path,
        compiled_contract=compiled_contract,
        contract_class=contract_class,
        class_hash=class_hash,
    )


def load_casm_artifact(path: str) -> CasmArtifact:
    """
    Loads a compiled (CASM) class and computes its compiled class hash. Compiler output
    without pythonic_hints is accepted, the hash does not cover hints.
    """
    compiled_contract = read_artifact(path)
    try:
        raw = json.loads(compiled_contract)
        if isinstance(raw, dict) and "pythonic_hints" not in raw:
            raw["pythonic_hints"] = []
            compiled_contract = json.dumps(raw)
        class_hash = compute_casm_class_hash(create_casm_class(compiled_contract))
    except ARTIFACT_PARSE_ERRORS as err:
        raise ArtifactError(
            f"not a valid compiled (CASM) class: {err}", step="parse artifact", subject=path
        ) from err
    logger.info("Loaded compiled class %s from %s", hex(class_hash), path)
    return CasmArtifact(path=path, class_hash=class_hash)
