# personcore/domain/policies/address_composer.py
from __future__ import annotations

import copy
from typing import Any, Dict, Mapping, Optional

from personcore.common.fields import get_field
from personcore.domain.dataclasses.address import AddressPair


def _as_dict(address: Any) -> Optional[Dict[str, Any]]:
    if address is None:
        return None
    if hasattr(address, "model_dump"):
        return address.model_dump(exclude_none=True)
    if isinstance(address, Mapping):
        return dict(address)
    raise TypeError(f"Unsupported address payload type {type(address)!r}")


def compose(ktp: Any, residence: Any, copy_flag: bool) -> AddressPair:
    """
    Decide the (legal, residence) pair to persist.

    copy_flag=True: residence becomes a deep copy of the KTP address, whatever
    residence value was supplied. This is an override, never a merge.
    copy_flag=False: both are used as given; None means no address for that role.
    Address internals are not validated here.
    """
    legal = _as_dict(ktp)
    if copy_flag:
        return AddressPair(legal=legal, residence=copy.deepcopy(legal))
    return AddressPair(legal=legal, residence=_as_dict(residence))


def compose_block(block: Any) -> AddressPair:
    """compose() over the nested `address` block of a submission."""
    if block is None:
        return AddressPair()
    return compose(
        get_field(block, "ktp"),
        get_field(block, "residence"),
        bool(get_field(block, "residence_same_as_ktp", False)),
    )
