import json
import logging
import os
from typing import Dict, List, NamedTuple, Optional, Union

from token_sender.errors import ManifestError
from token_sender.utils import parse_felt

logger = logging.getLogger(__name__)

DIR = os.path.dirname(__file__)
DEFAULT_MANIFEST_FILE = os.path.join(DIR, "manifest.json")

# Calldata entries starting with this prefix name a contract from the manifest.
CONTRACT_REF_PREFIX = "$"

CalldataEntry = Union[str, int]


class CallTemplate(NamedTuple):
    contract: str
    function: str
    calldata: List[CalldataEntry]


class DeploySpec(NamedTuple):
    artifact: str
    salt: int
    unique: bool
    constructor_calldata: List[CalldataEntry]


class Manifest(NamedTuple):
    contracts: Dict[str, int]
    calls: Dict[str, List[CallTemplate]]
    deploy: Optional[DeploySpec]

    def contract_address(self, name: str) -> int:
        try:
            return self.contracts[name]
        except KeyError:
            raise ManifestError(f"unknown contract {name!r}", step="resolve contract") from None

    def resolve_felt(self, entry: CalldataEntry) -> int:
        if isinstance(entry, str) and entry.startswith(CONTRACT_REF_PREFIX):
            return self.contract_address(entry[len(CONTRACT_REF_PREFIX) :])
        try:
            return parse_felt(entry)
        except (TypeError, ValueError) as err:
            raise ManifestError(
                f"invalid calldata literal {entry!r}", step="resolve calldata"
            ) from err

    def resolve_calldata(self, entries: List[CalldataEntry]) -> List[int]:
        return [self.resolve_felt(entry) for entry in entries]


def _parse_template(name: str, raw: dict, subject: str) -> CallTemplate:
    try:
        return CallTemplate(
            contract=raw["contract"],
            function=raw["function"],
            calldata=list(raw.get("calldata", [])),
        )
    except (KeyError, TypeError) as err:
        raise ManifestError(
            f"call template {name!r} is malformed: {err}", step="load manifest", subject=subject
        ) from err


def parse_manifest(raw: dict, subject: str = "<manifest>") -> Manifest:
    """
    Validates a manifest document. Contract addresses are parsed eagerly, calldata
    references are checked so a bad manifest fails before any account is built.
    """
    if not isinstance(raw, dict):
        raise ManifestError("manifest must be a JSON object", step="load manifest", subject=subject)

    contracts = {}
    for name, address in raw.get("contracts", {}).items():
        try:
            contracts[name] = parse_felt(address)
        except (TypeError, ValueError) as err:
            raise ManifestError(
                f"contract {name!r} has an invalid address", step="load manifest", subject=subject
            ) from err

    calls = {}
    for name, templates in raw.get("calls", {}).items():
        if not isinstance(templates, list) or not templates:
            raise ManifestError(
                f"call template {name!r} must be a non-empty list",
                step="load manifest",
                subject=subject,
            )
        calls[name] = [_parse_template(name, template, subject) for template in templates]

    deploy = None
    if raw.get("deploy") is not None:
        deploy_raw = raw["deploy"]
        try:
            deploy = DeploySpec(
                artifact=deploy_raw["artifact"],
                salt=parse_felt(deploy_raw.get("salt", 0)),
                unique=bool(deploy_raw.get("unique", False)),
                constructor_calldata=list(deploy_raw.get("constructor_calldata", [])),
            )
        except (KeyError, TypeError, ValueError) as err:
            raise ManifestError(
                f"deploy section is malformed: {err}", step="load manifest", subject=subject
            ) from err

    manifest = Manifest(contracts=contracts, calls=calls, deploy=deploy)
    for templates in manifest.calls.values():
        for template in templates:
            manifest.contract_address(template.contract)
            manifest.resolve_calldata(template.calldata)
    if manifest.deploy is not None:
        manifest.resolve_calldata(manifest.deploy.constructor_calldata)
    return manifest


def load_manifest(path: Optional[str] = None) -> Manifest:
    path = path or DEFAULT_MANIFEST_FILE
    try:
        with open(path) as manifest_file:
            raw = json.load(manifest_file)
    except OSError as err:
        raise ManifestError(str(err), step="load manifest", subject=path) from err
    except json.JSONDecodeError as err:
        raise ManifestError(f"invalid JSON: {err}", step="load manifest", subject=path) from err
    logger.debug("Loaded manifest %s", path)
    return parse_manifest(raw, subject=path)
