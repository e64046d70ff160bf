"""Price/balance preflight and account top-up."""

import asyncio
import logging
from contextlib import AsyncExitStack
from dataclasses import dataclass
from typing import Optional

from momentvault.storage.base import StorageNetworkClient
from momentvault.upload.exceptions import FundingTransactionError, NetworkQueryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FundingState:
    """Observed price and pre-top-up balance for one payload size."""

    network: str
    size_bytes: int
    price: int
    balance: int
    funded_amount: int = 0

    @property
    def was_funded(self) -> bool:
        return self.funded_amount > 0

    @property
    def has_sufficient_funds(self) -> bool:
        return self.balance >= self.price


async def check_funding(network: StorageNetworkClient, size_bytes: int) -> FundingState:
    """Query price then balance for ``size_bytes`` without funding.

    Raises:
        NetworkQueryError: If either query fails
    """
    try:
        price = await network.get_price(size_bytes)
        balance = await network.get_balance()
    except NetworkQueryError:
        raise
    except Exception as e:
        raise NetworkQueryError(f"{network.name} price/balance query failed: {e}") from e

    return FundingState(network=network.name, size_bytes=size_bytes, price=price, balance=balance)


async def ensure_funded(
    network: StorageNetworkClient,
    size_bytes: int,
    margin: int = 0,
    lock: Optional[asyncio.Lock] = None,
) -> FundingState:
    """Make sure the account can pay for ``size_bytes`` bytes.

    Queries price and balance in that order; when the balance is short,
    funds the exact deficit plus ``margin`` and waits for confirmation.
    The price can still move between this check and the upload.

    Args:
        network: Ready storage network client
        size_bytes: Number of bytes about to be uploaded
        margin: Extra atomic units funded on top of the deficit
        lock: Optional lock serializing check-then-fund per account

    Returns:
        FundingState with the observed price and pre-top-up balance

    Raises:
        NetworkQueryError: If the price or balance query fails
        FundingTransactionError: If the top-up fails to confirm
    """
    async with AsyncExitStack() as stack:
        if lock is not None:
            await stack.enter_async_context(lock)

        state = await check_funding(network, size_bytes)
        logger.info(
            f"Funding preflight on {network.name}: price={state.price}, balance={state.balance}",
            extra={"network": network.name, "size_bytes": size_bytes, "price": state.price, "balance": state.balance},
        )

        if state.has_sufficient_funds:
            return state

        amount = state.price - state.balance + margin
        logger.info(
            f"Funding {network.name} with {amount}",
            extra={"network": network.name, "deficit": state.price - state.balance, "margin": margin},
        )
        try:
            await network.fund(amount)
        except FundingTransactionError:
            raise
        except Exception as e:
            raise FundingTransactionError(f"{network.name} funding of {amount} failed: {e}") from e

        return FundingState(
            network=state.network,
            size_bytes=size_bytes,
            price=state.price,
            balance=state.balance,
            funded_amount=amount,
        )
