"""EVM contract adapter."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from eth_utils import is_address, to_checksum_address

from ...errors import FunctionNotFoundError
from ...observability.logging import get_logger
from ...types import ContractSchema, ExecutionMethod, FieldType, FormFieldConfig
from ..base import ContractAdapter
from .abi import parse_evm_abi
from .encoding import EvmTransactionData, encode_function_call, parse_evm_value
from .mapping import map_evm_param_type_to_field_type, parse_evm_array_type
from .query import query_evm_view_function

logger = get_logger(__name__)


class EvmAdapter(ContractAdapter):
    """Adapter for Ethereum-compatible chains (Solidity ABI)."""

    ecosystem = "evm"
    package_name = "@chainform/adapter-evm"
    class_name = "EvmAdapter"
    supports_view_queries = True
    supported_execution_methods = (ExecutionMethod.EOA, ExecutionMethod.RELAYER)

    def __init__(self, network_config: Any = None, *, rpc_timeout: float = 10.0):
        super().__init__(network_config)
        self.rpc_timeout = rpc_timeout

    def map_parameter_type_to_field_type(self, parameter_type: str) -> FieldType:
        return map_evm_param_type_to_field_type(parameter_type)

    def parse_array_element_type(self, parameter_type: str) -> Optional[str]:
        return parse_evm_array_type(parameter_type)

    def is_valid_address(self, address: Any) -> bool:
        return isinstance(address, str) and is_address(address)

    def load_contract_schema(self, definition: Any, address: str = "") -> ContractSchema:
        return parse_evm_abi(definition, address)

    def format_transaction_data(
        self,
        contract_schema: ContractSchema,
        function_id: str,
        submitted_inputs: Mapping[str, Any],
        fields: Sequence[FormFieldConfig],
    ) -> EvmTransactionData:
        function = self._require_function(contract_schema, function_id)
        args: List[Any] = [
            parse_evm_value(parameter.type, value, parameter.components)
            for parameter, value in self._resolve_argument_values(function, submitted_inputs, fields)
        ]
        address = contract_schema.address
        if self.is_valid_address(address):
            address = to_checksum_address(address)
        return EvmTransactionData(
            address=address,
            function_name=function.name,
            args=args,
            data=encode_function_call(function, args),
        )

    async def query_view_function(
        self,
        contract_address: str,
        function_id: str,
        params: Sequence[Any] = (),
        contract_schema: Optional[ContractSchema] = None,
    ) -> Any:
        if contract_schema is None:
            raise ValueError("A contract schema is required to query EVM view functions")
        function = contract_schema.get_function(function_id)
        if function is None:
            raise FunctionNotFoundError(function_id)
        rpc_url = getattr(self.network_config, "rpc_url", None)
        if not rpc_url:
            raise ValueError("Network configuration has no rpc_url")
        logger.debug("eth_call %s on %s", function.name, contract_address)
        return await query_evm_view_function(
            rpc_url,
            contract_address,
            function,
            params,
            timeout=self.rpc_timeout,
        )


# Registry entry point.
ADAPTER_CLASS = EvmAdapter
