"""Utility for resolving account names to IDs."""

from payledger.domain.account import AccountService
from payledger.domain.errors import NotFoundError, ValidationError


def resolve_account(account_service: AccountService, account: str | int | None) -> int:
    """Resolve account name or ID to account ID.

    Args:
        account_service: AccountService instance
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        ValidationError: If no account was given
        NotFoundError: If account is not found
    """
    if account is None or (isinstance(account, str) and not account.strip()):
        raise ValidationError("No account given. Use --account or set PAYLEDGER_ACCOUNT")

    if isinstance(account, int):
        account_id = account
    else:
        try:
            account_id = int(account)
        except ValueError:
            account_id = None

    if account_id is not None:
        if account_service.get_account(account_id) is None:
            raise NotFoundError(f"Account ID {account_id} not found")
        return account_id

    for acc in account_service.list_accounts():
        if acc.name == account:
            return acc.id

    raise NotFoundError(f"Account '{account}' not found")
