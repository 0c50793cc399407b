from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Mapping

from backend.core.errors import ValidationError
from backend.core.schema import Ledger, LedgerLine
from backend.domain import AccountSubject


def line_totals(lines: Iterable[LedgerLine]) -> tuple[Decimal, Decimal]:
    debit = Decimal("0")
    credit = Decimal("0")
    for line in lines:
        debit += line.debit_amount
        credit += line.credit_amount
    return debit, credit


def validate_ledger_lines(lines: list[LedgerLine], accounts: Mapping[str, AccountSubject]) -> None:
    """Check account codes, single-sided amounts and debit/credit balance."""

    errors: list[dict[str, object]] = []
    for index, line in enumerate(lines):
        if line.account_code not in accounts:
            errors.append({"loc": ["lines", index, "accountCode"], "msg": f"unknown account code {line.account_code!r}"})
        if line.debit_amount and line.credit_amount:
            errors.append({"loc": ["lines", index], "msg": "a line carries either a debit or a credit amount"})
    if errors:
        raise ValidationError("invalid ledger lines", errors)

    debit, credit = line_totals(lines)
    if debit != credit:
        raise ValidationError(
            "debit and credit totals differ",
            [{"loc": ["lines"], "msg": f"debit {debit} != credit {credit}"}],
        )


def validate_ledger_total(ledger: Ledger) -> None:
    if not ledger.lines:
        return
    debit, _ = line_totals(ledger.lines)
    if debit != ledger.total_amount:
        raise ValidationError(
            "totalAmount does not match line totals",
            [{"loc": ["totalAmount"], "msg": f"totalAmount {ledger.total_amount} != line total {debit}"}],
        )
