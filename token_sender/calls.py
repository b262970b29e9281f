import re
from typing import List

from starknet_py.hash.selector import get_selector_from_name
from starknet_py.net.client_models import Call

from token_sender.errors import ManifestError
from token_sender.manifest import CallTemplate, Manifest

CAIRO_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def get_selector(function_name: str) -> int:
    if not isinstance(function_name, str) or not CAIRO_IDENTIFIER.match(function_name):
        raise ManifestError(
            f"{function_name!r} is not a valid function name", step="resolve selector"
        )
    return get_selector_from_name(function_name)


def build_call(manifest: Manifest, template: CallTemplate) -> Call:
    return Call(
        to_addr=manifest.contract_address(template.contract),
        selector=get_selector(template.function),
        calldata=manifest.resolve_calldata(template.calldata),
    )


def build_calls(manifest: Manifest, name: str) -> List[Call]:
    """
    Builds the ordered call list of a named template. Only manifest literals feed the
    result, so the same manifest always yields the same calls.
    """
    try:
        templates = manifest.calls[name]
    except KeyError:
        raise ManifestError(f"unknown call template {name!r}", step="build calls") from None
    return [build_call(manifest, template) for template in templates]
