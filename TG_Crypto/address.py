from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from TG_Tool_Box.Hash import address_hash


class AddressType(Enum):
    PUBKEY_BOOT = "pubkey-boot"
    PUBKEY_HD = "pubkey-hd"
    REDEEM = "redeem"


ADDRESS_PREFIXES = {
    AddressType.PUBKEY_BOOT: "0xB",
    AddressType.PUBKEY_HD: "0xH",
    AddressType.REDEEM: "0xR",
}


@dataclass(frozen=True)
class Address:
    addr_type: AddressType
    root: bytes
    hd_path: Optional[Tuple[int, int]] = None

    def __str__(self) -> str:
        return ADDRESS_PREFIXES[self.addr_type] + self.root.hex()


def _address_root(addr_type: AddressType, public_key_bytes: bytes, hd_path: Optional[Tuple[int, int]] = None) -> bytes:
    spending = addr_type.value.encode("ascii") + b":" + public_key_bytes
    if hd_path is not None:
        spending += b":" + b"/".join(str(i).encode("ascii") for i in hd_path)
    return address_hash(spending)


def make_pubkey_address_boot(public_key_bytes: bytes) -> Address:
    return Address(AddressType.PUBKEY_BOOT, _address_root(AddressType.PUBKEY_BOOT, public_key_bytes))


def make_hd_address_boot(public_key_bytes: bytes, account_index: int, address_index: int) -> Address:
    path = (account_index, address_index)
    return Address(AddressType.PUBKEY_HD, _address_root(AddressType.PUBKEY_HD, public_key_bytes, path), hd_path=path)


def make_redeem_address(redeem_public_key: bytes) -> Address:
    return Address(AddressType.REDEEM, _address_root(AddressType.REDEEM, redeem_public_key))
