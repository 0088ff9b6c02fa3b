"""List Accounts Use Case

Admin view of the account pool, optionally filtered by platform.
"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.account_repository import AccountRepository
from .dtos import AccountResponseDTO, ListAccountsResponseDTO


class ListAccounts:
    def __init__(self, account_repo: AccountRepository):
        self.account_repo = account_repo

    async def execute(self, platform_id: Optional[int] = None) -> Result[ListAccountsResponseDTO]:
        accounts = await self.account_repo.list_accounts(platform_id)
        items = [
            AccountResponseDTO.from_entity(account, await self.account_repo.list_slots(account.id))
            for account in accounts
        ]
        return Return.ok(ListAccountsResponseDTO(accounts=items, total_count=len(items)))
