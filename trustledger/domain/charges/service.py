"""Guarded operations on charges."""

from decimal import Decimal
from typing import Any

from trustledger.domain.base import GuardedService
from trustledger.domain.charges.models import Charge, ChargeType, PaymentMethod
from trustledger.mutation.guard import MutationOutcome


class ChargeService(GuardedService):
    """Creates charges and runs their mutations through the guard."""

    domain = "charge"

    async def create_charge(
        self,
        amount: Decimal,
        charge_type: ChargeType = ChargeType.SERVICE,
        created_by: str | None = None,
        **fields: Any,
    ) -> Charge:
        charge = Charge.created_by_actor(
            created_by, amount=amount, charge_type=charge_type, **fields
        )
        await self._guard.record_creation(
            charge,
            f"Charge created ({charge.charge_type.value}): {charge.amount:.2f}",
            {
                "type": charge.charge_type.value,
                "amount": str(charge.amount),
                "is_paid": charge.is_paid,
                "payment_method": charge.payment_method.value,
            },
        )
        return charge

    async def mark_as_paid(
        self,
        charge: Charge,
        method: PaymentMethod,
        actor: str | None = None,
    ) -> MutationOutcome:
        """Settle a charge. Marking as 'unpaid' is a no-op."""

        def apply() -> dict[str, Any]:
            charge.is_paid = True
            charge.payment_method = method
            return {"is_paid": True}

        return await self._guard.execute(
            charge,
            action="mark_as_paid",
            actor=actor,
            context={"method": method.value},
            precondition=lambda: method is not PaymentMethod.UNPAID,
            apply=apply,
            detail=f"Marked as paid ({method.value})",
            denied_detail="Denied marking paid",
        )

    async def update_amount(
        self,
        charge: Charge,
        amount: Decimal,
        actor: str | None = None,
    ) -> MutationOutcome:
        old_amount = charge.amount

        def apply() -> dict[str, Any]:
            charge.amount = amount
            return {"old_amount": str(old_amount), "new_amount": str(amount)}

        return await self._guard.execute(
            charge,
            action="update_amount",
            actor=actor,
            context={"old_amount": str(old_amount), "new_amount": str(amount)},
            precondition=lambda: amount != charge.amount,
            apply=apply,
            detail=f"Amount changed from {old_amount:.2f} to {amount:.2f}",
            denied_detail="Denied update_amount",
        )

    async def add_note(
        self, charge: Charge, note: str, actor: str | None = None
    ) -> MutationOutcome:
        return await self._guard.note(charge, note, actor)

    async def delete_charge(
        self, charge: Charge, actor: str | None = None
    ) -> MutationOutcome:
        """Soft-delete a charge. Deleting an already deleted charge is a no-op."""

        def apply() -> dict[str, Any]:
            charge.is_deleted = True
            return {"is_deleted": True}

        return await self._guard.execute(
            charge,
            action="delete_charge",
            actor=actor,
            context={"amount": str(charge.amount)},
            precondition=lambda: not charge.is_deleted,
            apply=apply,
            detail=f"Charge deleted ({charge.amount:.2f})",
            denied_detail="Denied delete_charge",
        )
