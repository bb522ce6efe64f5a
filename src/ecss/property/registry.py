"""Registry of property contracts and their application order."""

from __future__ import annotations

import logging
from collections import deque

from ecss.errors import RegistrationError
from ecss.property.contract import PropertyContract

logger = logging.getLogger(__name__)


class PropertyRegistry:
    """Maps property names to contracts and orders them for the apply phase.

    Contracts are applied in registration order, except that a contract
    registered with ``after=<name>`` always runs after the named one.  This
    is how per-edge overrides such as ``margin-top`` win over the composite
    ``margin`` within a single cycle.
    """

    def __init__(self) -> None:
        self._contracts: dict[str, PropertyContract] = {}
        self._after: dict[str, str] = {}
        self._ordered: list[PropertyContract] | None = None

    def register(self, contract: PropertyContract, *, after: str | None = None) -> None:
        """Register *contract*, optionally to be applied after the contract named *after*.

        Re-registering a name with the same value type replaces the previous
        contract.  A different value type is a programming error.
        """
        if not contract.name:
            raise RegistrationError(f"{type(contract).__name__} has no property name")
        existing = self._contracts.get(contract.name)
        if existing is not None:
            if existing.value_type != contract.value_type:
                raise RegistrationError(
                    f"Property {contract.name!r} already registered with value type "
                    f"{_type_name(existing.value_type)}, cannot re-register with "
                    f"{_type_name(contract.value_type)}"
                )
            logger.warning("Replacing contract for property %r", contract.name)
        self._contracts[contract.name] = contract
        if after is not None:
            self._after[contract.name] = after
        else:
            self._after.pop(contract.name, None)
        self._ordered = None

    def get(self, name: str) -> PropertyContract | None:
        return self._contracts.get(name)

    def names(self) -> set[str]:
        return set(self._contracts)

    def predecessor(self, name: str) -> str | None:
        return self._after.get(name)

    def ordered(self) -> list[PropertyContract]:
        """Contracts in application order.

        Stable: without constraints the registration order is kept.
        Raises :class:`RegistrationError` for an unknown predecessor or a cycle.
        """
        if self._ordered is not None:
            return list(self._ordered)

        names = list(self._contracts)
        position = {name: i for i, name in enumerate(names)}
        successors: dict[str, list[str]] = {name: [] for name in names}
        indegree = {name: 0 for name in names}
        for name, before in self._after.items():
            if before not in self._contracts:
                raise RegistrationError(
                    f"Property {name!r} is ordered after unregistered property {before!r}"
                )
            successors[before].append(name)
            indegree[name] += 1

        ready = deque(name for name in names if indegree[name] == 0)
        result: list[str] = []
        while ready:
            name = ready.popleft()
            result.append(name)
            released = []
            for succ in successors[name]:
                indegree[succ] -= 1
                if indegree[succ] == 0:
                    released.append(succ)
            for succ in sorted(released, key=position.__getitem__):
                ready.append(succ)

        if len(result) != len(names):
            stuck = sorted(set(names) - set(result))
            raise RegistrationError(f"Cyclic apply ordering between properties: {', '.join(stuck)}")

        self._ordered = [self._contracts[name] for name in result]
        return list(self._ordered)

    def __contains__(self, name: object) -> bool:
        return name in self._contracts

    def __len__(self) -> int:
        return len(self._contracts)


def _type_name(value_type: object) -> str:
    return getattr(value_type, "__name__", repr(value_type))
