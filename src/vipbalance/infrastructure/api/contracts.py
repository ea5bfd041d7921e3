"""Contract selection from the auth answer"""

from collections.abc import Sequence
from typing import TYPE_CHECKING

from loguru import logger

from vipbalance.domain.models import Contract
from vipbalance.shared.exceptions import ContractNotFound, EmptyContractList

if TYPE_CHECKING:
    from loguru import Logger


def resolve_contract(
    contracts: Sequence[Contract],
    contract_filter: str,
    log: "Logger | None" = None,
) -> str:
    """Pick the contract id to query

    With an empty filter the first contract is used. Otherwise the first
    contract whose number contains the filter (case-sensitive substring)
    wins.

    Args:
        contracts: Contracts in the order returned by the server
        contract_filter: Substring of the contract number, may be empty
        log: Logger instance, defaults to the global loguru logger

    Returns:
        Contract id

    Raises:
        EmptyContractList: If the filter is empty and there are no contracts
        ContractNotFound: If no contract number contains the filter
    """
    log = log or logger
    if not contract_filter:
        if not contracts:
            raise EmptyContractList("Server returned no contracts")
        chosen = contracts[0]
        log.info(f"Using contract: {chosen.number}")
        return chosen.id

    for contract in contracts:
        if contract_filter in contract.number:
            log.info(f"Using contract: {contract.number}")
            return contract.id

    raise ContractNotFound(contract_filter)
