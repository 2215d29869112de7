"""In-memory wallet ledger.

Maps public key -> WalletInfo. Keypairs are generated with `solders` and the
secret half goes straight into the key store; the ledger only keeps the
public key and balances.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from solders.keypair import Keypair

from agent_wallet.errors import InvalidInputError, NotFoundError
from agent_wallet.wallet.chain import SimulatedChain
from agent_wallet.wallet.keystore import KeyStore
from agent_wallet.wallet.schemas import TokenBalance, WalletInfo


class WalletManager:
    def __init__(self, *, chain: SimulatedChain, key_store: Optional[KeyStore] = None):
        self.chain = chain
        self.key_store = key_store or KeyStore()
        self._wallets: Dict[str, WalletInfo] = {}

    async def create_wallet(self) -> WalletInfo:
        """Generate a keypair, stash the secret key, register a zero-balance wallet."""
        keypair = Keypair()
        public_key = str(keypair.pubkey())
        self.key_store.store_key(public_key, bytes(keypair))
        wallet = WalletInfo(public_key=public_key)
        self._wallets[public_key] = wallet
        return wallet

    def get_wallet(self, public_key: str) -> Optional[WalletInfo]:
        return self._wallets.get(public_key)

    def require_wallet(self, public_key: str) -> WalletInfo:
        wallet = self._wallets.get(public_key)
        if wallet is None:
            raise NotFoundError(f"Wallet not found: {public_key}")
        return wallet

    def list_wallets(self) -> List[WalletInfo]:
        return list(self._wallets.values())

    def update_balance(self, public_key: str, balance: float) -> None:
        if balance < 0:
            raise InvalidInputError(f"Wallet balance cannot be negative: {balance}")
        self.require_wallet(public_key).balance = float(balance)

    def update_token_balances(self, public_key: str, token_balances: List[TokenBalance]) -> None:
        self.require_wallet(public_key).token_balances = list(token_balances)

    def get_keypair(self, public_key: str) -> Optional[Keypair]:
        secret = self.key_store.retrieve_key(public_key)
        if secret is None:
            return None
        return Keypair.from_bytes(secret)

    async def refresh(self, public_key: str) -> WalletInfo:
        """Overwrite the ledger entry with the chain's view of the account."""
        wallet = self.require_wallet(public_key)
        balance = await self.chain.get_balance(public_key)
        tokens = await self.chain.get_token_balances(public_key)
        wallet.balance = balance
        wallet.token_balances = tokens
        return wallet

    async def fund(self, public_key: str, amount: float) -> str:
        """Airdrop SOL to the wallet and pull the new balance. Returns the airdrop signature."""
        self.require_wallet(public_key)
        if amount <= 0:
            raise InvalidInputError(f"Funding amount must be positive, got {amount}")
        signature = await self.chain.request_airdrop(public_key, amount)
        await self.refresh(public_key)
        return signature

    def delete_wallet(self, public_key: str) -> None:
        self.key_store.delete_key(public_key)
        self._wallets.pop(public_key, None)

    def __len__(self) -> int:
        return len(self._wallets)


__all__ = ["WalletManager"]
