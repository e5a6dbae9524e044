"""Read-only contract calls over JSON-RPC ``eth_call``."""

from __future__ import annotations

from typing import Any, Optional, Sequence

import httpx
from eth_abi import decode
from eth_utils import decode_hex

from ...errors import ChainformError
from ...observability.logging import get_logger
from ...types import ContractFunction
from .abi import canonical_type
from .encoding import encode_function_call, parse_evm_value

logger = get_logger(__name__)


async def query_evm_view_function(
    rpc_url: str,
    contract_address: str,
    function: ContractFunction,
    params: Sequence[Any] = (),
    *,
    timeout: float = 10.0,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """Call a view/pure function and decode its outputs.

    Returns the single decoded value for one-output functions, otherwise a list.
    """
    if function.modifies_state:
        raise ValueError(f"Function {function.name} is not a view function")
    if len(params) != len(function.inputs):
        raise ValueError(f"{function.name} expects {len(function.inputs)} argument(s), got {len(params)}")

    args = [parse_evm_value(p.type, value, p.components) for p, value in zip(function.inputs, params)]
    payload = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "eth_call",
        "params": [{"to": contract_address, "data": encode_function_call(function, args)}, "latest"],
    }

    owns_client = client is None
    http = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))
    try:
        response = await http.post(rpc_url, json=payload)
        response.raise_for_status()
        body = response.json()
    finally:
        if owns_client:
            await http.aclose()

    if body.get("error"):
        error = body["error"]
        message = error.get("message") if isinstance(error, dict) else str(error)
        raise ChainformError(f"eth_call failed: {message}", code="CF_RPC_ERROR", context={"function_id": function.id})

    output_types = [canonical_type(p) for p in function.outputs]
    if not output_types:
        return None
    decoded = decode(output_types, decode_hex(body.get("result") or "0x"))
    logger.debug("Decoded %d output(s) from %s", len(decoded), function.name)
    return decoded[0] if len(decoded) == 1 else list(decoded)
